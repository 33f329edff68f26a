"""
Pytest fixtures for tests.

Game logic is exercised against a fake Socket.IO server that records every
emit and holds background tasks until a test runs them, so deferred round
advancement happens exactly when the test says so.
"""

import random

import pytest

from game import GameManager, VoteManager
from lobby import LobbyManager, PlayerManager
from utils.constants import MOVIE_CATALOG


TOTAL_VOTES = 10
MAX_PLAYERS = 5
MOVIES_PER_GAME = 5


class FakeSocketIO:
    """Records emits and queues background tasks instead of running them."""

    def __init__(self):
        self.emitted = []
        self.tasks = []
        self.sleeps = []

    def emit(self, event, data=None, room=None, **kwargs):
        self.emitted.append((event, data, room))

    def start_background_task(self, target, *args, **kwargs):
        self.tasks.append((target, args, kwargs))

    def sleep(self, seconds=0):
        self.sleeps.append(seconds)

    def run_pending(self):
        """Run queued tasks, including any they queue in turn."""
        ran = 0
        while self.tasks:
            target, args, kwargs = self.tasks.pop(0)
            target(*args, **kwargs)
            ran += 1
        return ran

    def events(self, name):
        """Payloads of every emit with this event name."""
        return [data for event, data, _ in self.emitted if event == name]

    def clear(self):
        self.emitted.clear()


@pytest.fixture
def socketio():
    return FakeSocketIO()


@pytest.fixture
def lobby_manager():
    return LobbyManager(
        player_manager=PlayerManager(total_votes=TOTAL_VOTES),
        max_players=MAX_PLAYERS
    )


@pytest.fixture
def game_manager(lobby_manager, socketio):
    return GameManager(
        lobby_manager,
        socketio,
        catalog=MOVIE_CATALOG,
        vote_manager=VoteManager(),
        movies_per_game=MOVIES_PER_GAME,
        round_advance_delay=1.0,
        rng=random.Random(1234)
    )


@pytest.fixture
def started_lobby(lobby_manager, game_manager, socketio):
    """A lobby with players 'a' and 'b' whose game has just started."""
    lobby, _ = lobby_manager.join_or_create('Alice', 'a')
    lobby_manager.join_or_create('Bob', 'b')
    game_manager.handle_ready('a')
    game_manager.handle_ready('b')
    assert lobby.game_started
    socketio.clear()
    return lobby


def vote(game_manager, sid, lobby, value='yes', weight=1):
    """Cast a vote on the lobby's current movie."""
    return game_manager.handle_vote(sid, {
        'playerId': sid,
        'movieId': lobby.current_movie.id,
        'vote': value,
        'votes': weight
    })
