"""
Helper utilities for Movie Night.

This module contains utility functions used throughout the application
for validation, generation, and data manipulation.
"""

import random
import re
import string
from typing import Any, Iterable, List, Optional, Sequence
from .constants import MAX_NAME_LENGTH, DEFAULT_PLAYER_NAME, VOTE_VALUES

def generate_lobby_code(length: int = 6) -> str:
    """Generate a random lobby code."""
    characters = string.ascii_uppercase + string.digits
    return ''.join(random.choices(characters, k=length))

def sanitize_player_name(name: Any) -> str:
    """
    Clean up a player-supplied name.

    Joining never fails, so anything unusable falls back to the default name.

    Args:
        name: Raw name from the client (may not even be a string)

    Returns:
        Sanitized player name
    """
    if not isinstance(name, str):
        return DEFAULT_PLAYER_NAME

    # Remove potential HTML/script content and excessive whitespace
    name = re.sub(r'<[^>]*>', '', name)
    name = re.sub(r'\s+', ' ', name).strip()

    if not name:
        return DEFAULT_PLAYER_NAME

    return name[:MAX_NAME_LENGTH]

def select_movies(catalog: Sequence, count: int, rng: Optional[random.Random] = None) -> List:
    """
    Draw a random subset of movies without replacement.

    Args:
        catalog: Full movie catalog
        count: Number of movies wanted
        rng: Optional random generator (tests pass a seeded one)

    Returns:
        List of distinct movies, at most len(catalog) long
    """
    rng = rng or random
    return rng.sample(list(catalog), min(count, len(catalog)))

def rank_by_score(items: Iterable, score) -> List:
    """
    Sort items by score, highest first.

    Python's sort is stable, so items with equal scores keep their input order.
    """
    return sorted(items, key=score, reverse=True)

def parse_vote_weight(value: Any) -> Optional[int]:
    """
    Parse a client-supplied vote weight.

    Returns:
        Non-negative integer weight, or None if the value is not usable
    """
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        weight = value
    elif isinstance(value, float) and value.is_integer():
        weight = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        weight = int(value.strip())
    else:
        return None

    return weight if weight >= 0 else None

def normalize_vote_value(value: Any) -> Optional[str]:
    """Return 'yes' or 'no', or None for anything else."""
    if not isinstance(value, str):
        return None
    value = value.strip().lower()
    return value if value in VOTE_VALUES else None
