"""
Game Manager - Coordinator for game operations.

Drives the per-lobby game state machine: readiness and game start, voting
rounds, deferred round advancement, results, and restart. All broadcasts
to lobby members go through the injected Socket.IO server, rooms being
named after lobby codes.
"""

import logging
import random
from typing import Optional, Dict, Any, Tuple, Sequence, Set, TYPE_CHECKING
from .models import MovieData
from .vote_manager import VoteManager
from utils.constants import MOVIE_CATALOG, SERVER_EVENTS, GAME_CONFIG
from utils.helpers import select_movies, parse_vote_weight, normalize_vote_value

if TYPE_CHECKING:
    from lobby.manager import LobbyManager
    from lobby.models import LobbyData

logger = logging.getLogger(__name__)

class GameManager:
    """
    Coordinates all game operations within lobbies.

    Every state change happens under the lobby's own lock. Rejected actions
    change nothing and broadcast nothing; they come back as a failed
    (success, message, data) tuple.
    """

    def __init__(self, lobby_manager: 'LobbyManager', socketio,
                 catalog: Optional[Sequence] = None,
                 vote_manager: Optional[VoteManager] = None,
                 movies_per_game: int = GAME_CONFIG['MOVIES_PER_GAME'],
                 round_advance_delay: float = GAME_CONFIG['ROUND_ADVANCE_DELAY'],
                 min_players: int = GAME_CONFIG['MIN_PLAYERS'],
                 rng: Optional[random.Random] = None):
        self.lobby_manager = lobby_manager
        self.socketio = socketio
        self.catalog = tuple(
            movie if isinstance(movie, MovieData) else MovieData.from_dict(movie)
            for movie in (MOVIE_CATALOG if catalog is None else catalog)
        )
        self.vote_manager = vote_manager or VoteManager()
        self.movies_per_game = movies_per_game
        self.round_advance_delay = round_advance_delay
        self.min_players = min_players
        self.rng = rng or random.Random()
        # (lobby_code, game_number, round) of advancements waiting to fire
        self.pending_advances: Set[Tuple[str, int, int]] = set()

    # Broadcasting

    def _emit(self, event: str, data: Any, lobby_data: 'LobbyData'):
        self.socketio.emit(event, data, room=lobby_data.code)

    def broadcast_roster(self, lobby_data: 'LobbyData'):
        """Send the current roster to everyone in the lobby."""
        with lobby_data.lock:
            self._emit(SERVER_EVENTS['ROSTER_UPDATED'], {
                'lobbyId': lobby_data.code,
                'players': lobby_data.get_roster()
            }, lobby_data)

    # Readiness and game start

    def handle_ready(self, session_id: str) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        """
        Mark a player ready and start the game once everyone is.

        Args:
            session_id: Session ID of the player

        Returns:
            tuple: (success, message, result_data)
        """
        lobby_data = self.lobby_manager.get_player_lobby(session_id)
        if not lobby_data:
            return False, "Player not in any lobby", None

        with lobby_data.lock:
            success, message, _ = self.lobby_manager.player_manager.mark_ready(lobby_data, session_id)
            if not success:
                return False, message, None

            self.broadcast_roster(lobby_data)

            if lobby_data.player_count >= self.min_players and lobby_data.all_ready:
                self.start_game(lobby_data)
                return True, "Game started", {'lobby_code': lobby_data.code, 'game_started': True}

        return True, message, {'lobby_code': lobby_data.code, 'game_started': False}

    def start_game(self, lobby_data: 'LobbyData'):
        """
        Start a new game in a lobby. Caller holds the lobby lock.

        Draws a fresh movie subset and wipes every per-game field, so nothing
        from a previous game can leak into this one.
        """
        lobby_data.selected_movies = select_movies(self.catalog, self.movies_per_game, self.rng)
        lobby_data.votes = {}
        lobby_data.round_acks = set()
        lobby_data.current_round = 0
        lobby_data.game_started = True
        lobby_data.game_number += 1

        logger.info(f"Started game {lobby_data.game_number} in lobby {lobby_data.code} "
                    f"with {lobby_data.player_count} players")

        self._emit(SERVER_EVENTS['GAME_STARTED'], {
            'movies': [movie.to_dict() for movie in lobby_data.selected_movies],
            'players': [{'id': p.session_id, 'name': p.username} for p in lobby_data.players]
        }, lobby_data)

        self.emit_round(lobby_data)

    # Rounds

    def emit_round(self, lobby_data: 'LobbyData'):
        """Broadcast the current round's movie, or the results if none are left."""
        if lobby_data.current_round < len(lobby_data.selected_movies):
            lobby_data.round_acks = set()
            self._emit(SERVER_EVENTS['ROUND_ADVANCED'], {
                'movie': lobby_data.current_movie.to_dict(),
                'remainingMovies': lobby_data.remaining_movies
            }, lobby_data)
        else:
            self.compute_results(lobby_data)

    def handle_vote(self, session_id: str, data: Any) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        """
        Handle a vote being cast.

        Args:
            session_id: Session ID of the voter
            data: Raw client payload {playerId, movieId, vote, votes}

        Returns:
            tuple: (success, message, vote_data)
        """
        if not isinstance(data, dict):
            return False, "Malformed vote", None

        claimed_id = data.get('playerId')
        if claimed_id is not None and claimed_id != session_id:
            return False, "Cannot vote for another player", None

        lobby_data = self.lobby_manager.get_player_lobby(session_id)
        if not lobby_data:
            return False, "Player not in any lobby", None

        movie_id = data.get('movieId')
        vote = normalize_vote_value(data.get('vote'))
        weight = parse_vote_weight(data.get('votes'))

        with lobby_data.lock:
            is_valid, message = self.vote_manager.validate_vote(
                lobby_data, session_id, movie_id, vote, weight
            )
            if not is_valid:
                return False, message, None

            player = lobby_data.get_player_by_session(session_id)
            movie_id = lobby_data.current_movie.id
            self.vote_manager.record_vote(lobby_data, player, vote, weight)

            vote_data = {
                'playerId': session_id,
                'movieId': movie_id,
                'vote': vote,
                'votes': weight,
                'remainingVotes': player.votes_remaining
            }
            self._emit(SERVER_EVENTS['VOTE_RECORDED'], vote_data, lobby_data)

            self._check_round_complete(lobby_data)

        return True, "Vote recorded", vote_data

    def _check_round_complete(self, lobby_data: 'LobbyData'):
        """Schedule advancement if every present player has voted this round."""
        if lobby_data.current_movie is None or not lobby_data.round_complete:
            return

        key = (lobby_data.code, lobby_data.game_number, lobby_data.current_round)
        if key in self.pending_advances:
            return

        self.pending_advances.add(key)
        self.socketio.start_background_task(
            self._delayed_advance, lobby_data, lobby_data.game_number, lobby_data.current_round
        )

    def _delayed_advance(self, lobby_data: 'LobbyData', game_number: int, round_number: int):
        """Background task: wait, then advance if the round is still complete."""
        self.socketio.sleep(self.round_advance_delay)
        try:
            self.advance_round(lobby_data, game_number, round_number)
        except Exception as e:
            logger.error(f"Error advancing round in lobby {lobby_data.code}: {e}")
        finally:
            self.pending_advances.discard((lobby_data.code, game_number, round_number))

    def advance_round(self, lobby_data: 'LobbyData', game_number: int, round_number: int) -> bool:
        """
        Move to the next round, re-checking live state first.

        Anything may have happened since the advancement was scheduled:
        a restart, a new game, disconnects, or the lobby being torn down.

        Returns:
            True if the round advanced
        """
        with lobby_data.lock:
            if (not lobby_data.game_started
                    or lobby_data.game_number != game_number
                    or lobby_data.current_round != round_number
                    or not lobby_data.round_complete):
                logger.debug(f"Skipping stale advancement for lobby {lobby_data.code} "
                             f"(game {game_number}, round {round_number})")
                return False

            lobby_data.current_round += 1
            logger.info(f"Lobby {lobby_data.code} advanced to round {lobby_data.current_round}")
            self.emit_round(lobby_data)
            return True

    # Results and restart

    def compute_results(self, lobby_data: 'LobbyData'):
        """Rank the game's movies and broadcast the results."""
        ranked = self.vote_manager.compute_results(lobby_data)

        logger.info(f"Results ready in lobby {lobby_data.code}: "
                    f"{[(r.movie.title, r.score) for r in ranked]}")

        self._emit(SERVER_EVENTS['RESULTS_READY'], {
            'rankedMovies': [r.to_dict() for r in ranked],
            'playerVotes': lobby_data.get_vote_map()
        }, lobby_data)
        return ranked

    def handle_restart(self, session_id: str) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        """
        Reset a lobby for another game, keeping its players.

        Returns:
            tuple: (success, message, result_data)
        """
        lobby_data = self.lobby_manager.get_player_lobby(session_id)
        if not lobby_data:
            return False, "Player not in any lobby", None

        with lobby_data.lock:
            lobby_data.game_started = False
            self.lobby_manager.player_manager.reset_players(lobby_data)

            logger.info(f"Lobby {lobby_data.code} reset by {session_id}")

            self._emit(SERVER_EVENTS['ROSTER_RESET'], {
                'players': lobby_data.get_roster()
            }, lobby_data)

        return True, "Lobby reset", {'lobby_code': lobby_data.code}

    # Connection lifecycle

    def handle_disconnect(self, session_id: str) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        """
        Remove a departed player and let the rest of the lobby carry on.

        Safe to call more than once for the same session.

        Returns:
            tuple: (success, message, result_data)
        """
        success, message, lobby_data = self.lobby_manager.leave_lobby(session_id)
        if not success or lobby_data is None:
            return False, message, None

        with lobby_data.lock:
            if lobby_data.is_empty:
                return True, message, {'lobby_code': lobby_data.code, 'lobby_closed': True}

            self.broadcast_roster(lobby_data)

            # The departed player may have been the last one the round was waiting on
            if lobby_data.game_started:
                self._check_round_complete(lobby_data)

        return True, message, {'lobby_code': lobby_data.code, 'lobby_closed': False}
