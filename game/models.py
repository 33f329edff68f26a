"""
Data models for game management.

These represent game-specific data structures that operate within lobbies.
"""

from dataclasses import dataclass
from typing import Dict, Any

@dataclass(frozen=True)
class MovieData:
    """A movie from the catalog. Immutable."""
    id: int
    title: str
    poster: str = ''
    description: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MovieData':
        """Build a movie from a catalog entry."""
        return cls(
            id=int(data['id']),
            title=data['title'],
            poster=data.get('poster', ''),
            description=data.get('description', '')
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'title': self.title,
            'poster': self.poster,
            'description': self.description
        }

@dataclass
class VoteTally:
    """Aggregate yes/no totals for one movie."""
    yes_votes: int = 0
    no_votes: int = 0

    @property
    def score(self) -> int:
        """Net score used for ranking."""
        return self.yes_votes - self.no_votes

    def add(self, vote: str, weight: int):
        """Add a weighted yes or no vote."""
        if vote == 'yes':
            self.yes_votes += weight
        else:
            self.no_votes += weight

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {
            'yesVotes': self.yes_votes,
            'noVotes': self.no_votes
        }

@dataclass
class RankedMovie:
    """A movie paired with its final tally."""
    movie: MovieData
    tally: VoteTally

    @property
    def score(self) -> int:
        return self.tally.score

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = self.movie.to_dict()
        data.update(self.tally.to_dict())
        return data
