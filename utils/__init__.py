"""
Utilities module for Movie Night.

This module contains constants, helper functions, and utility classes
used throughout the application.
"""

from .constants import MOVIE_CATALOG, VOTE_VALUES, CLIENT_EVENTS, SERVER_EVENTS, GAME_CONFIG
from .helpers import (
    generate_lobby_code, sanitize_player_name, select_movies, rank_by_score,
    parse_vote_weight, normalize_vote_value
)

__all__ = [
    'MOVIE_CATALOG',
    'VOTE_VALUES',
    'CLIENT_EVENTS',
    'SERVER_EVENTS',
    'GAME_CONFIG',
    'generate_lobby_code',
    'sanitize_player_name',
    'select_movies',
    'rank_by_score',
    'parse_vote_weight',
    'normalize_vote_value'
]
