"""Closed-world resource selection delegated to the generative oracle."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from pydantic import ValidationError

from intelligence.llm import BaseLLM, Message
from models import CandidateSet, DigestDraft
from utils.exceptions import DigestError, LLMError, SelectionMalformedError


logger = logging.getLogger(__name__)

SECTION_COUNT = 3

SYSTEM_PROMPT = (
    "You are a research assistant that ONLY selects and organizes resources from provided lists. "
    "You NEVER invent new resources. Always respond with valid JSON only."
)

_LANG_NAMES = {"en": "English", "tr": "Turkish"}


def language_directive(lang: str) -> str:
    if lang == "tr":
        return (
            "Write summary, importance, overview, reason, and note in TURKISH. "
            "Keep resource titles in original language."
        )
    return "Write summary, importance, overview, reason, and note in ENGLISH."


def build_prompt(topic: str, lang: str, candidates: CandidateSet) -> str:
    """Selection instruction embedding the full candidate sets verbatim."""
    language = _LANG_NAMES.get(lang, "English")
    videos_json = json.dumps(
        [video.model_dump(by_alias=True) for video in candidates.videos],
        indent=2,
        ensure_ascii=False,
    )
    articles_json = json.dumps(
        [article.model_dump(by_alias=True) for article in candidates.articles],
        indent=2,
        ensure_ascii=False,
    )

    return f"""You are selecting resources for a topic digest about: "{topic}"

{language_directive(lang)}

AVAILABLE YOUTUBE VIDEOS (select from these ONLY):
{videos_json}

AVAILABLE ARTICLES (select from these ONLY):
{articles_json}

YOUR TASK:
1. Create exactly {SECTION_COUNT} sections that cover the key aspects of "{topic}"
2. For EACH section, SELECT:
   - 1 YouTube video (by exact videoId) from the list above
   - 1 article/source (by exact url) from the list above.
   - Aim for a mix of standard web, [News] for timeliness, [Tor] for alternative views, [Paper] for academic depth, and [GitHub] for real-world code/tools.
3. Explain WHY you selected each resource (in {language})
4. Write a 4-6 sentence summary of the topic

STRICT RULES - VIOLATIONS WILL CAUSE FAILURE:
- DO NOT invent new video titles - use EXACT titles from candidates
- DO NOT invent new channel names - use EXACT channelTitle from candidates
- DO NOT create new URLs - use EXACT url from candidates
- DO NOT add resources not in the provided lists
- You MAY leave youtube or article fields empty if nothing relevant fits
- You MUST use exact videoId/url values from the candidate lists
- Each section should focus on a different aspect of the topic
- imagePrompt is ALWAYS written in English, whatever the content language

OUTPUT FORMAT (JSON only, no markdown, no code fences):
{{
  "topic": "{topic}",
  "user_level": "intermediate",
  "summary": "4-6 sentences about the topic in {language}",
  "sections": [
    {{
      "title": "Section title in {language}",
      "importance": "Why this section matters - one sentence",
      "overview": "Focused explanation of this aspect",
      "imagePrompt": "A detailed English prompt for an AI image generator",
      "youtube": {{
        "videoId": "exact videoId from candidates",
        "channel": "exact channelTitle from candidates",
        "title": "exact title from candidates",
        "reason": "Why this video helps understand this section"
      }},
      "article": {{
        "url": "exact url from candidates",
        "source": "domain name",
        "note": "What you learn from this source"
      }}
    }}
  ]
}}"""


def strip_code_fences(text: str) -> str:
    cleaned = str(text or "").strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_selection(content: str) -> DigestDraft:
    """Deserialize oracle output into a draft; no repair is attempted."""
    try:
        payload: Any = json.loads(strip_code_fences(content))
    except (ValueError, RecursionError) as exc:
        raise SelectionMalformedError("Failed to parse LLM response as JSON") from exc

    if not isinstance(payload, dict):
        raise SelectionMalformedError("LLM response is not a JSON object")

    sections = payload.get("sections")
    if not isinstance(sections, list) or len(sections) != SECTION_COUNT:
        count = len(sections) if isinstance(sections, list) else 0
        raise SelectionMalformedError(
            f"LLM did not return exactly {SECTION_COUNT} sections",
            {"sections": count},
        )

    try:
        return DigestDraft.model_validate(payload)
    except ValidationError as exc:
        raise SelectionMalformedError(
            "LLM response does not match the digest shape",
            {"errors": exc.error_count()},
        ) from exc


class SelectionEngine:
    """Asks the oracle to partition a topic into sections citing only supplied candidates."""

    def __init__(self, llm: BaseLLM, *, temperature: float | None = None) -> None:
        self.llm = llm
        self.temperature = temperature

    async def select(self, topic: str, lang: str, candidates: CandidateSet) -> DigestDraft:
        prompt = build_prompt(topic, lang, candidates)
        messages = [Message.system(SYSTEM_PROMPT), Message.user(prompt)]

        overrides: Dict[str, Any] = {"json_mode": True}
        if self.temperature is not None:
            overrides["temperature"] = self.temperature

        try:
            response = await self.llm.acomplete(messages, **overrides)
        except DigestError:
            raise
        except Exception as exc:
            raise LLMError(f"Analysis error. {exc}", provider=self.llm.provider) from exc

        content = str(response.content or "").strip()
        if not content:
            raise LLMError("No response from LLM", provider=self.llm.provider)

        draft = parse_selection(content)
        logger.info(
            "selection_parsed model=%s sections=%d usage=%s",
            response.model,
            len(draft.sections),
            response.usage or {},
        )
        return draft
