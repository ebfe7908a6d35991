"""Unit tests for section illustration locators."""

from __future__ import annotations

import random

import pytest

from conftest import section_payload, selection_json
from pipeline.imagery import ImageAugmenter
from pipeline.selection import parse_selection


def test_locator_encodes_prompt_and_carries_seed(settings):
    augmenter = ImageAugmenter(settings=settings, rng=random.Random(7))
    expected_seed = random.Random(7).randrange(1_000_000)

    url = augmenter.build_locator("A marble bust of Seneca, soft light")

    assert url == (
        "https://image.pollinations.ai/prompt/A%20marble%20bust%20of%20Seneca%2C%20soft%20light"
        f"?width=1024&height=600&nologo=true&seed={expected_seed}"
    )


def test_locator_respects_overrides(settings):
    augmenter = ImageAugmenter(base_url="https://img.example.com/", width=640, height=480, settings=settings)

    url = augmenter.build_locator("a/b")

    assert url.startswith("https://img.example.com/prompt/a%2Fb?width=640&height=480&nologo=true&seed=")


@pytest.mark.asyncio
async def test_empty_text_yields_empty_reference(settings):
    assert await ImageAugmenter(settings=settings).illustrate("  ") == ""


@pytest.mark.asyncio
async def test_augment_falls_back_to_title_and_keeps_order(settings):
    sections = parse_selection(
        selection_json(
            [
                section_payload(title="Virtue"),
                section_payload(title="Control"),
                section_payload(title="Death"),
            ]
        )
    ).sections
    sections[1] = sections[1].model_copy(update={"image_prompt": ""})

    augmented = await ImageAugmenter(settings=settings).augment(sections)

    assert [s.title for s in augmented] == ["Virtue", "Control", "Death"]
    assert "/prompt/An%20illustration%20of%20virtue?" in augmented[0].image_url
    assert "/prompt/Control?" in augmented[1].image_url
    assert sections[0].image_url == ""


@pytest.mark.asyncio
async def test_failing_section_gets_empty_reference(settings, monkeypatch):
    sections = parse_selection(
        selection_json([section_payload(title=t) for t in ("One", "Two", "Three")])
    ).sections
    augmenter = ImageAugmenter(settings=settings)
    original = augmenter.illustrate

    async def flaky(text):
        if "two" in text:
            raise RuntimeError("encoder failed")
        return await original(text)

    monkeypatch.setattr(augmenter, "illustrate", flaky)

    augmented = await augmenter.augment(sections)

    assert augmented[0].image_url
    assert augmented[1].image_url == ""
    assert augmented[2].image_url
