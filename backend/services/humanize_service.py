# backend/services/humanize_service.py

import random
import re
from dataclasses import dataclass

LEVEL_STRENGTH = {
    "light": 1,
    "moderate": 2,
    "strong": 3,
}

STYLE_SUFFIX = {
    "academic": "This analysis provides a comprehensive examination of the topic through an academic lens.",
    "creative": "The vibrant tapestry of ideas weaves together in this creative exploration.",
    "professional": "This professional assessment offers key insights into the matter at hand.",
    "casual": "Just thinking out loud here, but that's my take on things!",
}
DEFAULT_SUFFIX = "This represents a balanced perspective on the subject."

SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?])\s+")


class HumanizationError(Exception):
    pass


@dataclass
class HumanizeResult:
    humanized_text: str
    plagiarism_score: dict
    ai_detection: dict


def split_sentences(text: str) -> list[str]:
    return SENTENCE_BOUNDARY_RE.split(text)


def reorder_sentences(sentences: list[str], level: str, rng: random.Random) -> list[str]:
    """Random pairwise swaps; the sentences themselves are never dropped or edited."""
    sentences = list(sentences)
    if len(sentences) <= 2:
        return sentences
    swaps = min(LEVEL_STRENGTH.get(level, 1), len(sentences) // 2)
    for _ in range(swaps):
        i = rng.randrange(len(sentences))
        j = rng.randrange(len(sentences))
        sentences[i], sentences[j] = sentences[j], sentences[i]
    return sentences


def simulate_humanized_text(text: str, options, rng: random.Random) -> str:
    sentences = split_sentences(text)
    if options.reorder_sentences:
        sentences = reorder_sentences(sentences, options.level, rng)
    body = " ".join(sentences)
    return f"{body}\n\n{STYLE_SUFFIX.get(options.style, DEFAULT_SUFFIX)}"


# scores are mocked and do not depend on the text
def mock_plagiarism_score(rng: random.Random) -> dict:
    return {
        "uniqueness": rng.randint(90, 99),
        "similarity": rng.randint(0, 9),
    }


def mock_ai_detection(rng: random.Random) -> dict:
    return {
        "gptDetector": rng.randint(1, 10),
        "zeroGPT": rng.randint(1, 12),
        "contentDetective": rng.randint(1, 8),
    }


def humanize(text: str, options, rng: random.Random | None = None) -> HumanizeResult:
    rng = rng or random.Random()
    try:
        humanized = simulate_humanized_text(text, options, rng)
    except (AttributeError, TypeError, ValueError) as e:
        raise HumanizationError(f"Error processing humanization request: {e}") from e

    return HumanizeResult(
        humanized_text=humanized,
        plagiarism_score=mock_plagiarism_score(rng),
        ai_detection=mock_ai_detection(rng),
    )
