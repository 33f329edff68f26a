"""
Game Module for Movie Night.

Contains all game-specific logic and components.
Game operations happen within lobbies but are separate from lobby management.
"""

from .models import MovieData, VoteTally, RankedMovie
from .vote_manager import VoteManager
from .manager import GameManager

__all__ = [
    # Data models
    'MovieData',
    'VoteTally',
    'RankedMovie',

    # Managers
    'GameManager',
    'VoteManager'
]
