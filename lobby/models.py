"""
Data models for lobby management.

These are pure data structures used to pass information between
lobby management, game systems, and handlers.
"""

import threading
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Set
from datetime import datetime
from game.models import MovieData, VoteTally

@dataclass
class PlayerData:
    """Represents a player in a lobby."""
    session_id: str
    username: str
    votes_remaining: int
    ready: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the roster entry sent to clients."""
        return {
            'id': self.session_id,
            'name': self.username,
            'ready': self.ready
        }

@dataclass
class LobbyData:
    """
    Represents a lobby's current state.

    All mutation goes through `lock`, which is per lobby. The game fields
    (selected_movies, votes, current_round, round_acks) are only meaningful
    while game_started is True and are reset on every game start.
    """
    code: str
    created_at: datetime
    max_players: int = 5
    players: List[PlayerData] = field(default_factory=list)
    game_started: bool = False
    selected_movies: List[MovieData] = field(default_factory=list)
    current_round: int = 0
    votes: Dict[int, VoteTally] = field(default_factory=dict)
    round_acks: Set[str] = field(default_factory=set)
    game_number: int = 0
    lock: Any = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def player_count(self) -> int:
        """Total number of players."""
        return len(self.players)

    @property
    def is_full(self) -> bool:
        """Check if lobby is at max capacity."""
        return self.player_count >= self.max_players

    @property
    def is_open(self) -> bool:
        """Check if new players may join."""
        return not self.game_started and not self.is_full

    @property
    def is_empty(self) -> bool:
        return not self.players

    @property
    def all_ready(self) -> bool:
        """Check if every player has readied up."""
        return all(p.ready for p in self.players)

    @property
    def current_movie(self) -> Optional[MovieData]:
        """Movie being voted on, or None once rounds are exhausted."""
        if self.game_started and self.current_round < len(self.selected_movies):
            return self.selected_movies[self.current_round]
        return None

    @property
    def remaining_movies(self) -> int:
        """Movies left including the current one."""
        return max(len(self.selected_movies) - self.current_round, 0)

    @property
    def round_complete(self) -> bool:
        """Every present player has voted at least once this round."""
        return bool(self.players) and all(p.session_id in self.round_acks for p in self.players)

    def get_player_by_session(self, session_id: str) -> Optional[PlayerData]:
        """Find player by session ID."""
        for player in self.players:
            if player.session_id == session_id:
                return player
        return None

    def get_roster(self) -> List[Dict[str, Any]]:
        """Roster as sent to clients, in join order."""
        return [p.to_dict() for p in self.players]

    def get_vote_map(self) -> Dict[int, Dict[str, int]]:
        """Raw per-movie tallies keyed by movie id."""
        return {movie_id: tally.to_dict() for movie_id, tally in self.votes.items()}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'code': self.code,
            'created_at': self.created_at.isoformat(),
            'max_players': self.max_players,
            'player_count': self.player_count,
            'is_full': self.is_full,
            'game_started': self.game_started,
            'current_round': self.current_round,
            'players': self.get_roster()
        }

@dataclass
class LobbyListItem:
    """Lightweight lobby info for listing active lobbies."""
    code: str
    player_count: int
    max_players: int
    is_full: bool
    game_started: bool
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'code': self.code,
            'player_count': self.player_count,
            'max_players': self.max_players,
            'is_full': self.is_full,
            'game_started': self.game_started,
            'created_at': self.created_at.isoformat()
        }
