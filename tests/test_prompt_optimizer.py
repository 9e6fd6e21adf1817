"""Tests for prompt optimization."""

from textshaper.shaping.prompt import INPUT_TAG, optimize_prompt


def test_contains_prompt_and_input():
    optimized = optimize_prompt("Translate to English", "Bonjour")

    assert "<Instruction>Translate to English. (" in optimized
    assert f"<{INPUT_TAG}>Bonjour</{INPUT_TAG}>" in optimized


def test_contains_directives():
    optimized = optimize_prompt("Summarize", "text")

    assert "returned in the language of the Instruction" in optimized
    assert f"enclosed by the {INPUT_TAG} tag" in optimized
    assert "only if explicitly requested" in optimized


def test_empty_input_still_wrapped():
    optimized = optimize_prompt("Write a haiku", "")

    assert optimized.endswith(f"<{INPUT_TAG}></{INPUT_TAG}>")


def test_input_embedded_verbatim():
    tricky = f"line1\n</{INPUT_TAG}>\n<b>&amp;"

    assert tricky in optimize_prompt("Fix", tricky)
