# backend/services/achievement_service.py
# Achievements live on the client; the caller sends its list and gets a new one back.

import copy
from datetime import datetime, timezone

FIRST_HUMANIZE = "first_humanize"
POWER_USER = "power_user"
AI_MASTER = "ai_master"
PERFECT_SCORE = "perfect_score"
TEXT_WIZARD = "text_wizard"

DEFAULT_ACHIEVEMENTS = [
    {
        "id": FIRST_HUMANIZE,
        "name": "First Transformation",
        "description": "Humanize your first text",
        "icon": "Wand2",
        "unlocked": False,
    },
    {
        "id": POWER_USER,
        "name": "Power User",
        "description": "Humanize 10 texts",
        "icon": "Zap",
        "unlocked": False,
        "progress": 0,
        "maxProgress": 10,
    },
    {
        "id": AI_MASTER,
        "name": "AI Detection Master",
        "description": "Get a score below 1% on any AI detection tool",
        "icon": "Shield",
        "unlocked": False,
    },
    {
        "id": PERFECT_SCORE,
        "name": "Perfect Score",
        "description": "Get 100% uniqueness on a text humanization",
        "icon": "Award",
        "unlocked": False,
    },
    {
        "id": TEXT_WIZARD,
        "name": "Text Wizard",
        "description": "Use all humanization options in a single session",
        "icon": "Sparkles",
        "unlocked": False,
        "progress": 0,
        "maxProgress": 5,
    },
]


def default_achievements() -> list[dict]:
    return copy.deepcopy(DEFAULT_ACHIEVEMENTS)


def _now():
    return datetime.now(timezone.utc).isoformat()


def unlock(achievement_id: str, achievements: list[dict]) -> list[dict]:
    updated = []
    for a in achievements:
        if a["id"] == achievement_id and not a.get("unlocked"):
            a = {**a, "unlocked": True, "dateUnlocked": _now()}
        updated.append(a)
    return updated


def increment_progress(achievement_id: str, achievements: list[dict], amount: int = 1) -> list[dict]:
    updated = []
    for a in achievements:
        if (a["id"] == achievement_id and not a.get("unlocked")
                and a.get("progress") is not None and a.get("maxProgress") is not None):
            progress = min(a["progress"] + amount, a["maxProgress"])
            done = progress >= a["maxProgress"]
            a = {**a, "progress": progress, "unlocked": done, "dateUnlocked": _now() if done else None}
        updated.append(a)
    return updated


def _score(scores: dict, key: str, default: float) -> float:
    # missing, zero or non-numeric scores count as the default
    value = scores.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return default
    return value


def process_achievements(action: str, data: dict | None, achievements: list[dict]) -> list[dict]:
    """Apply one client action (humanize_text or use_option) to an achievement list."""
    data = data or {}
    updated = list(achievements)

    if action == "humanize_text":
        updated = unlock(FIRST_HUMANIZE, updated)
        updated = increment_progress(POWER_USER, updated)

        ai_detection = data.get("aiDetection")
        if isinstance(ai_detection, dict):
            lowest = min(
                _score(ai_detection, "gptDetector", 100),
                _score(ai_detection, "zeroGPT", 100),
                _score(ai_detection, "contentDetective", 100),
            )
            if lowest <= 1:
                updated = unlock(AI_MASTER, updated)

        plagiarism = data.get("plagiarismScore")
        if isinstance(plagiarism, dict) and _score(plagiarism, "uniqueness", 0) >= 99:
            updated = unlock(PERFECT_SCORE, updated)

    elif action == "use_option":
        updated = increment_progress(TEXT_WIZARD, updated)

    return updated
