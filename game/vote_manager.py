"""
Vote Manager for Movie Night.

Handles vote validation, tallying against player budgets, and result ranking.
Contains no round or broadcast logic - purely voting mechanics.
"""

import logging
from typing import List, Optional, Tuple, TYPE_CHECKING
from .models import VoteTally, RankedMovie
from utils.constants import VOTE_VALUES
from utils.helpers import rank_by_score

if TYPE_CHECKING:
    from lobby.models import LobbyData, PlayerData

logger = logging.getLogger(__name__)

class VoteManager:
    """
    Manages vote validation, recording and result ranking.

    The server-held budget on PlayerData is the only source of truth;
    whatever the client believes it has left is never consulted.
    """

    def validate_vote(self,
                     lobby_data: 'LobbyData',
                     session_id: str,
                     movie_id,
                     vote: Optional[str],
                     weight: Optional[int]) -> Tuple[bool, str]:
        """
        Validate a vote before recording it.

        Votes naming any movie other than the one currently shown are
        dropped as stale, including a late vote for the previous round.
        A weight of 0 is valid and only acknowledges the round.

        Args:
            lobby_data: Lobby the voter belongs to
            session_id: Session ID of the voter
            movie_id: Movie the client says it is voting on
            vote: Normalized vote value ('yes'/'no') or None
            weight: Parsed non-negative weight or None

        Returns:
            Tuple of (is_valid, error_message)
        """
        player = lobby_data.get_player_by_session(session_id)
        if not player:
            return False, "Player not found in lobby"

        current_movie = lobby_data.current_movie
        if current_movie is None:
            return False, "No round in progress"

        if str(movie_id) != str(current_movie.id):
            return False, "Vote is not for the current movie"

        if vote not in VOTE_VALUES:
            return False, "Invalid vote value"

        if weight is None:
            return False, "Invalid vote weight"

        if player.votes_remaining < weight:
            return False, f"Not enough votes remaining ({player.votes_remaining} < {weight})"

        return True, "Vote is valid"

    def record_vote(self,
                   lobby_data: 'LobbyData',
                   player: 'PlayerData',
                   vote: str,
                   weight: int) -> VoteTally:
        """
        Record a validated vote on the current movie.

        Args:
            lobby_data: Lobby the vote belongs to
            player: Voting player
            vote: 'yes' or 'no'
            weight: Number of budgeted votes spent

        Returns:
            The movie's updated tally
        """
        movie_id = lobby_data.current_movie.id
        tally = lobby_data.votes.setdefault(movie_id, VoteTally())
        tally.add(vote, weight)

        player.votes_remaining -= weight
        lobby_data.round_acks.add(player.session_id)

        logger.info(f"Recorded vote in lobby {lobby_data.code}: {player.username} "
                    f"{vote} x{weight} on movie {movie_id}")
        return tally

    def compute_results(self, lobby_data: 'LobbyData') -> List[RankedMovie]:
        """
        Rank the game's movies by net score.

        Movies nobody voted on count as 0/0. Equal scores keep the order the
        movies were shown in.

        Args:
            lobby_data: Lobby whose game just ended

        Returns:
            Ranked movies, best first
        """
        results = [
            RankedMovie(movie=movie, tally=lobby_data.votes.get(movie.id, VoteTally()))
            for movie in lobby_data.selected_movies
        ]
        return rank_by_score(results, lambda ranked: ranked.score)
