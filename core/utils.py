"""Utility functions for vocanova application."""

import math
import re


def normalize_text(text: str) -> str:
    """Lowercase and strip surrounding whitespace."""
    return text.lower().strip()


def letters_only(text: str) -> str:
    """Lowercase and drop everything that is not a-z."""
    return re.sub(r'[^a-z]', '', text.lower())


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return min(high, max(low, value))


_USER_ID_RE = re.compile(r'^[A-Za-z0-9_-]+$')


def validate_user_id(user_id: str) -> str:
    """Return user_id unchanged, or raise ValueError if it is unsafe as a file name part."""
    if not isinstance(user_id, str) or not _USER_ID_RE.match(user_id):
        raise ValueError(f"Invalid user id {user_id!r}: use letters, digits, '_' or '-'")
    return user_id
