"""
Main lobby management system.

The lobby registry: tracks active lobbies, places joining players into an
open lobby (creating one on demand), and routes session ids to lobbies.
Everything is held in process memory.
"""

import logging
import threading
from typing import Optional, List, Dict, Tuple
from datetime import datetime
from .models import LobbyData, PlayerData, LobbyListItem
from .player_manager import PlayerManager
from utils.constants import GAME_CONFIG
from utils.helpers import generate_lobby_code

logger = logging.getLogger(__name__)

class LobbyManager:
    """
    Main lobby management coordinator.

    Lock order is registry lock first, then a lobby's own lock. Game code
    that already holds a lobby lock must not call back into the registry.
    """

    def __init__(self, player_manager: Optional[PlayerManager] = None,
                 max_players: int = GAME_CONFIG['MAX_PLAYERS']):
        self.player_manager = player_manager or PlayerManager()
        self.max_players = max_players
        self.active_lobbies: Dict[str, LobbyData] = {}  # creation order
        self.session_lobby_map: Dict[str, str] = {}  # session_id -> lobby_code
        self._lock = threading.Lock()

    @property
    def lobby_count(self) -> int:
        return len(self.active_lobbies)

    def join_or_create(self, username: str, session_id: str) -> Tuple[LobbyData, PlayerData]:
        """
        Place a player into the first open lobby, creating one if none is open.

        Never fails. The session must not already be in a lobby; callers
        remove it first with leave_lobby().

        Args:
            username: Player's chosen username
            session_id: Player's session ID

        Returns:
            tuple: (lobby_data, player_data)
        """
        with self._lock:
            for lobby_data in self.active_lobbies.values():
                with lobby_data.lock:
                    success, _, player_data = self.player_manager.add_player(
                        lobby_data, session_id, username
                    )
                if success:
                    break
            else:
                lobby_data = self._create_lobby()
                with lobby_data.lock:
                    _, _, player_data = self.player_manager.add_player(
                        lobby_data, session_id, username
                    )

            self.session_lobby_map[session_id] = lobby_data.code

        logger.info(f"Session {session_id} joined lobby {lobby_data.code} "
                    f"({lobby_data.player_count}/{lobby_data.max_players})")
        return lobby_data, player_data

    def leave_lobby(self, session_id: str) -> Tuple[bool, str, Optional[LobbyData]]:
        """
        Remove a player from their lobby, deleting the lobby if it empties.

        Safe to call for unknown or already removed sessions.

        Args:
            session_id: Player's session ID

        Returns:
            tuple: (success, message, lobby_data). lobby_data is the lobby the
            player left; it is empty if the lobby was deleted.
        """
        with self._lock:
            lobby_code = self.session_lobby_map.pop(session_id, None)
            if not lobby_code:
                return False, "Player not in any lobby", None

            lobby_data = self.active_lobbies.get(lobby_code)
            if not lobby_data:
                return False, "Lobby not found", None

            with lobby_data.lock:
                success, message, _ = self.player_manager.remove_player(lobby_data, session_id)
                if lobby_data.is_empty:
                    self._cleanup_lobby(lobby_code)

        return success, message, lobby_data

    def get_lobby(self, lobby_code: str) -> Optional[LobbyData]:
        """Get lobby data by code."""
        return self.active_lobbies.get(lobby_code)

    def get_player_lobby(self, session_id: str) -> Optional[LobbyData]:
        """
        Get the lobby a session belongs to.

        Args:
            session_id: Player's session ID

        Returns:
            Lobby data or None
        """
        lobby_code = self.session_lobby_map.get(session_id)
        if not lobby_code:
            return None
        return self.active_lobbies.get(lobby_code)

    def get_active_lobbies(self) -> List[LobbyListItem]:
        """
        Get list of all active lobbies.

        Returns:
            List of lobby info
        """
        with self._lock:
            lobbies = list(self.active_lobbies.values())

        return [
            LobbyListItem(
                code=lobby_data.code,
                player_count=lobby_data.player_count,
                max_players=lobby_data.max_players,
                is_full=lobby_data.is_full,
                game_started=lobby_data.game_started,
                created_at=lobby_data.created_at
            )
            for lobby_data in lobbies
        ]

    def _create_lobby(self) -> LobbyData:
        """Create and register an empty lobby. Caller holds the registry lock."""
        lobby_code = generate_lobby_code()
        while lobby_code in self.active_lobbies:
            lobby_code = generate_lobby_code()

        lobby_data = LobbyData(
            code=lobby_code,
            created_at=datetime.utcnow(),
            max_players=self.max_players
        )
        self.active_lobbies[lobby_code] = lobby_data

        logger.info(f"Created lobby: {lobby_code}")
        return lobby_data

    def _cleanup_lobby(self, lobby_code: str):
        """Drop an empty lobby. Caller holds the registry lock."""
        self.active_lobbies.pop(lobby_code, None)
        logger.info(f"Cleaned up lobby {lobby_code}")
