"""
Player management for lobbies.

Handles player operations like joining, leaving, readiness and resets.
Callers hold the lobby lock around these calls.
"""

import logging
from typing import Optional, Tuple
from .models import PlayerData, LobbyData
from utils.constants import GAME_CONFIG
from utils.helpers import sanitize_player_name

logger = logging.getLogger(__name__)

class PlayerManager:
    """Manages player operations within lobbies."""

    def __init__(self, total_votes: int = GAME_CONFIG['TOTAL_VOTES']):
        self.total_votes = total_votes

    def add_player(self, lobby_data: LobbyData, session_id: str,
                  username: str) -> Tuple[bool, str, Optional[PlayerData]]:
        """
        Add a player to a lobby.

        Args:
            lobby_data: The lobby to add player to
            session_id: Player's session ID
            username: Player's chosen username

        Returns:
            tuple: (success, message, player_data)
        """
        if not lobby_data.is_open:
            return False, "Lobby is not accepting players", None

        if lobby_data.get_player_by_session(session_id):
            return False, "Session already has a player in this lobby", None

        player_data = PlayerData(
            session_id=session_id,
            username=sanitize_player_name(username),
            votes_remaining=self.total_votes,
            ready=False
        )
        lobby_data.players.append(player_data)

        logger.info(f"Player {player_data.username} added to lobby {lobby_data.code}")
        return True, "Player added successfully", player_data

    def remove_player(self, lobby_data: LobbyData, session_id: str) -> Tuple[bool, str, Optional[str]]:
        """
        Remove a player from a lobby.

        Args:
            lobby_data: The lobby to remove player from
            session_id: Session ID of player to remove

        Returns:
            tuple: (success, message, removed_username)
        """
        player = lobby_data.get_player_by_session(session_id)
        if not player:
            return False, "Player not found in lobby", None

        lobby_data.players.remove(player)
        lobby_data.round_acks.discard(session_id)

        logger.info(f"Player {player.username} removed from lobby {lobby_data.code}")
        return True, f"Player {player.username} removed", player.username

    def mark_ready(self, lobby_data: LobbyData, session_id: str) -> Tuple[bool, str, Optional[PlayerData]]:
        """
        Mark a player as ready for the next game.

        Returns:
            tuple: (success, message, player_data)
        """
        if lobby_data.game_started:
            return False, "Game already in progress", None

        player = lobby_data.get_player_by_session(session_id)
        if not player:
            return False, "Player not found in lobby", None

        player.ready = True
        return True, f"Player {player.username} is ready", player

    def reset_players(self, lobby_data: LobbyData):
        """Clear readiness and refill every player's vote budget."""
        for player in lobby_data.players:
            player.ready = False
            player.votes_remaining = self.total_votes
