import random

import pytest

from services.humanize_service import (
    STYLE_SUFFIX,
    DEFAULT_SUFFIX,
    humanize,
    reorder_sentences,
    split_sentences,
)
from conftest import make_humanize_options

TEXT = "The sun rose early. Birds started to sing! Was anyone awake? The town slept on. Coffee brewed slowly."


def _body(humanized):
    return humanized.split("\n\n")[0]


def test_split_sentences():
    assert split_sentences("One. Two! Three? Four") == ["One.", "Two!", "Three?", "Four"]


@pytest.mark.parametrize("level", ["light", "moderate", "strong"])
def test_reorder_keeps_every_sentence(level):
    rng = random.Random(7)
    for _ in range(50):
        result = humanize(TEXT, make_humanize_options(level=level), rng)
        body = split_sentences(_body(result.humanized_text))
        assert len(body) == len(split_sentences(TEXT))
        assert sorted(body) == sorted(split_sentences(TEXT))


def test_reorder_swap_count_is_bounded_by_level():
    class CountingRandom(random.Random):
        calls = 0

        def randrange(self, *args, **kwargs):
            self.calls += 1
            return super().randrange(*args, **kwargs)

    rng = CountingRandom(1)
    reorder_sentences(["a.", "b.", "c.", "d.", "e.", "f.", "g."], "strong", rng)
    assert rng.calls == 2 * 3

    rng = CountingRandom(1)
    reorder_sentences(["a.", "b.", "c."], "strong", rng)
    assert rng.calls == 2 * 1


def test_two_sentences_are_never_reordered():
    sentences = ["First.", "Second."]
    assert reorder_sentences(sentences, "strong", random.Random(3)) == sentences


def test_no_reorder_keeps_text_order():
    result = humanize(TEXT, make_humanize_options(reorder_sentences=False))
    assert _body(result.humanized_text) == TEXT


def test_academic_example():
    text = "Sentence A. Sentence B. Sentence C."
    options = make_humanize_options(level="light", style="academic", fix_grammar=True, add_synonyms=False)
    result = humanize(text, options)

    body, suffix = result.humanized_text.split("\n\n")
    assert sorted(split_sentences(body)) == ["Sentence A.", "Sentence B.", "Sentence C."]
    assert suffix.startswith("This analysis provides a comprehensive examination")


@pytest.mark.parametrize("style", list(STYLE_SUFFIX))
def test_style_suffix(style):
    result = humanize("Just one line.", make_humanize_options(style=style))
    assert result.humanized_text.endswith(STYLE_SUFFIX[style])


def test_standard_style_uses_default_suffix():
    result = humanize("Just one line.", make_humanize_options(style="standard"))
    assert result.humanized_text == f"Just one line.\n\n{DEFAULT_SUFFIX}"


def test_scores_stay_in_range():
    rng = random.Random(42)
    for _ in range(200):
        result = humanize("Anything.", make_humanize_options(), rng)
        assert 90 <= result.plagiarism_score["uniqueness"] <= 99
        assert 0 <= result.plagiarism_score["similarity"] <= 9
        assert 1 <= result.ai_detection["gptDetector"] <= 10
        assert 1 <= result.ai_detection["zeroGPT"] <= 12
        assert 1 <= result.ai_detection["contentDetective"] <= 8
