from __future__ import annotations
from typing import List

# -----------------------------
# Team emoji palette (cycled)
# -----------------------------
TEAM_EMOJIS: List[str] = [
    "🦁", "🐯", "🦊", "🐺", "🦝", "🐻", "🐼", "🐨", "🦄", "🐲",
    "🦅", "🦉", "🦋", "🐬", "🐙", "🦈", "🌵", "⚡", "🔥", "🌊",
]

# --------------------------------------------
# CSV name columns (lower-cased, not criteria)
# --------------------------------------------
NAME_COLUMNS = {"firstname", "lastname", "displayname", "name", "fullname", "email"}

DISPLAY_NAME_KEY = "display_name"


# ---------------------
# Normalization helpers
# ---------------------
def normalize_value(v: str) -> str:
    # Case-insensitive grouping key used by assignment, metrics and quality
    if not v:
        return ""
    return str(v).strip().lower()


def team_name(index: int) -> str:
    return f"Team {index + 1}"


def emoji_for(index: int) -> str:
    return TEAM_EMOJIS[index % len(TEAM_EMOJIS)]
