"""
Lobby Module for Movie Night.

Contains all lobby management logic and components.
Handles lobby creation, player management, and session routing.
"""

from .models import LobbyData, PlayerData, LobbyListItem
from .manager import LobbyManager
from .player_manager import PlayerManager

__all__ = [
    # Data models
    'LobbyData',
    'PlayerData',
    'LobbyListItem',

    # Managers
    'LobbyManager',
    'PlayerManager'
]
