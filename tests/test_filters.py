"""Unit tests for the deterministic candidate filter."""

from __future__ import annotations

from conftest import article, video
from pipeline.filters import (
    FilterContext,
    build_candidate_set,
    filter_articles,
    filter_videos,
    is_clickbait,
    rejection_reason,
    topic_terms,
)


def test_clickbait_markers_are_case_insensitive():
    assert is_clickbait("SHOCKING truth about Stoicism")
    assert is_clickbait("You Won't Believe what Seneca wrote")
    assert is_clickbait("Mind blown by Marcus Aurelius")
    assert is_clickbait("10 Secrets of the Stoics")
    assert is_clickbait("7tricks for calm")
    assert is_clickbait("Watch before it is deleted soon")
    assert is_clickbait("Stoicism Exposed")


def test_all_caps_title_rule_matches_whole_title_only():
    assert is_clickbait("THIS CHANGES EVERYTHING!!")
    # Short, digits or lowercase letters break the whole-title pattern.
    assert not is_clickbait("AI NEWS")
    assert not is_clickbait("GPT4 EXPLAINED IN DETAIL")
    assert not is_clickbait("Stoicism Explained")


def test_topic_terms_drop_short_tokens():
    assert topic_terms("AI and ML in Go") == ["and"]
    assert topic_terms("Machine Learning") == ["machine", "learning"]


def test_relevance_requires_a_topic_term_in_title_or_description():
    videos = [
        video("a", "Intro to Machine Learning", "ChanA"),
        video("b", "Cooking pasta", "ChanB", description="learning to cook"),
        video("c", "Cooking pasta", "ChanC", description="nothing here"),
    ]

    kept = filter_videos(videos, "machine learning")

    assert [v.video_id for v in kept] == ["a", "b"]


def test_short_token_topic_admits_every_relevant_candidate():
    videos = [
        video("a", "Something unrelated", "ChanA"),
        video("b", "Another thing", "ChanB"),
    ]

    assert filter_videos(videos, "AI ML") == videos


def test_diversity_keeps_first_per_channel_case_insensitively():
    videos = [
        video("a", "Stoicism part 1", "Daily Stoic"),
        video("b", "Stoicism part 2", "daily stoic "),
        video("c", "Stoicism lecture", "Philosophy Tube"),
    ]

    kept = filter_videos(videos, "Stoicism")

    assert [v.video_id for v in kept] == ["a", "c"]


def test_rejected_candidate_does_not_claim_its_source():
    articles = [
        article("https://a.com/1", "SHOCKING stoicism facts", "a.com"),
        article("https://a.com/2", "Stoicism guide", "a.com"),
    ]

    kept = filter_articles(articles, "stoicism")

    assert [a.url for a in kept] == ["https://a.com/2"]


def test_missing_identity_or_title_is_dropped():
    articles = [
        article("", "Stoicism primer", "x.com"),
        article("https://y.com", "", "y.com", snippet="stoicism"),
        article("https://z.com", "Stoicism primer", "z.com"),
    ]

    kept = filter_articles(articles, "stoicism")

    assert [a.url for a in kept] == ["https://z.com"]


def test_rejection_reason_names_first_failing_rule():
    ctx = FilterContext.for_topic("stoicism")

    assert rejection_reason(video("", "Stoicism", "A"), ctx) == "completeness"
    assert rejection_reason(video("v1", "STOICISM IS EVERYTHING", "A"), ctx) == "clickbait"
    assert rejection_reason(video("v2", "Gardening", "A"), ctx) == "relevance"
    assert rejection_reason(video("v3", "Stoicism 101", "A"), ctx) is None
    assert rejection_reason(video("v4", "Stoicism 102", "a"), ctx) == "diversity"


def test_filter_is_idempotent_and_order_preserving():
    articles = [
        article("https://n.com/s", "[News] Stoicism revival", "n.com"),
        article("https://ahmia/1.onion", "[Tor] Stoicism mirror", "Tor Network (Onion Site)"),
        article("https://ahmia/2.onion", "[Tor] Stoicism forum", "Tor Network (Onion Site)"),
        article("http://arxiv.org/abs/1", "[Paper] Stoicism and CBT", "ArXiv.org (Scientific Paper)"),
    ]

    once = filter_articles(articles, "stoicism")
    twice = filter_articles(once, "stoicism")

    assert once == twice
    assert [a.url for a in once] == [
        "https://n.com/s",
        "https://ahmia/1.onion",
        "http://arxiv.org/abs/1",
    ]


def test_build_candidate_set_filters_each_pool_independently():
    videos = [
        video("v1", "Stoicism Explained", "School of Life"),
        video("v2", "SHOCKING Stoic Secrets", "ClickFarm"),
        video("v3", "Stoicism for beginners", "school of life"),
    ]
    articles = [
        article("https://en.wikipedia.org/wiki/Stoicism", "Stoicism - Wikipedia", "wikipedia.org"),
        article("https://plato.stanford.edu/stoicism", "Stoicism", "plato.stanford.edu"),
        article("https://school-of-life.com/a", "Stoicism essay", "School of Life"),
    ]

    candidates = build_candidate_set(videos, articles, "Stoicism")

    assert [v.video_id for v in candidates.videos] == ["v1"]
    # Video channels and article sources are tracked separately.
    assert len(candidates.articles) == 3
    assert not candidates.is_empty
