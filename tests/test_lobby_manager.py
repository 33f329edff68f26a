"""Tests for the lobby registry and player manager."""

import pytest

from lobby import LobbyManager, PlayerManager
from tests.conftest import MAX_PLAYERS, TOTAL_VOTES


class TestJoinOrCreate:
    """Players are placed into the first open lobby, or a new one."""

    def test_first_join_creates_lobby(self, lobby_manager):
        lobby, player = lobby_manager.join_or_create('Alice', 'a')

        assert lobby_manager.lobby_count == 1
        assert lobby_manager.get_lobby(lobby.code) is lobby
        assert player.session_id == 'a'
        assert player.username == 'Alice'
        assert player.ready is False
        assert player.votes_remaining == TOTAL_VOTES

    def test_second_player_joins_same_lobby(self, lobby_manager):
        first, _ = lobby_manager.join_or_create('Alice', 'a')
        second, _ = lobby_manager.join_or_create('Bob', 'b')

        assert first is second
        assert [p.session_id for p in first.players] == ['a', 'b']

    def test_full_lobby_overflows_into_new_lobby(self, lobby_manager):
        lobbies = [lobby_manager.join_or_create(f'P{i}', f's{i}')[0] for i in range(MAX_PLAYERS + 1)]

        assert len({lobby.code for lobby in lobbies[:MAX_PLAYERS]}) == 1
        assert lobbies[MAX_PLAYERS] is not lobbies[0]
        assert lobby_manager.lobby_count == 2

    def test_started_lobby_is_skipped(self, lobby_manager):
        lobby, _ = lobby_manager.join_or_create('Alice', 'a')
        lobby.game_started = True

        other, _ = lobby_manager.join_or_create('Bob', 'b')

        assert other is not lobby
        assert lobby.player_count == 1

    def test_session_is_routed_to_its_lobby(self, lobby_manager):
        lobby, _ = lobby_manager.join_or_create('Alice', 'a')

        assert lobby_manager.get_player_lobby('a') is lobby
        assert lobby_manager.get_player_lobby('nobody') is None

    def test_lobby_codes_are_unique(self, lobby_manager, monkeypatch):
        codes = iter(['AAAAAA', 'AAAAAA', 'BBBBBB'])
        monkeypatch.setattr('lobby.manager.generate_lobby_code', lambda: next(codes))

        first, _ = lobby_manager.join_or_create('Alice', 'a')
        first.game_started = True
        second, _ = lobby_manager.join_or_create('Bob', 'b')

        assert first.code == 'AAAAAA'
        assert second.code == 'BBBBBB'

    def test_name_is_sanitized(self, lobby_manager):
        _, player = lobby_manager.join_or_create('   ', 'a')
        assert player.username == 'Player'


class TestLeaveLobby:
    """Removing players and tearing down empty lobbies."""

    def test_leave_keeps_lobby_with_remaining_players(self, lobby_manager):
        lobby, _ = lobby_manager.join_or_create('Alice', 'a')
        lobby_manager.join_or_create('Bob', 'b')

        success, _, left = lobby_manager.leave_lobby('a')

        assert success is True
        assert left is lobby
        assert [p.session_id for p in lobby.players] == ['b']
        assert lobby_manager.get_lobby(lobby.code) is lobby
        assert lobby_manager.get_player_lobby('a') is None

    def test_lobby_removed_exactly_when_last_player_leaves(self, lobby_manager):
        lobby, _ = lobby_manager.join_or_create('Alice', 'a')
        lobby_manager.join_or_create('Bob', 'b')

        lobby_manager.leave_lobby('a')
        assert lobby_manager.lobby_count == 1

        lobby_manager.leave_lobby('b')
        assert lobby_manager.lobby_count == 0
        assert lobby_manager.get_lobby(lobby.code) is None

    def test_leave_is_idempotent(self, lobby_manager):
        lobby_manager.join_or_create('Alice', 'a')

        assert lobby_manager.leave_lobby('a')[0] is True
        assert lobby_manager.leave_lobby('a') == (False, "Player not in any lobby", None)
        assert lobby_manager.leave_lobby('never-joined')[0] is False

    def test_leave_clears_round_ack(self, lobby_manager):
        lobby, _ = lobby_manager.join_or_create('Alice', 'a')
        lobby_manager.join_or_create('Bob', 'b')
        lobby.round_acks.update({'a', 'b'})

        lobby_manager.leave_lobby('a')

        assert lobby.round_acks == {'b'}

    def test_active_lobby_listing(self, lobby_manager):
        lobby, _ = lobby_manager.join_or_create('Alice', 'a')

        items = lobby_manager.get_active_lobbies()

        assert len(items) == 1
        data = items[0].to_dict()
        assert data['code'] == lobby.code
        assert data['player_count'] == 1
        assert data['max_players'] == MAX_PLAYERS
        assert data['is_full'] is False
        assert data['game_started'] is False


class TestPlayerManager:
    """Per-lobby player mutations."""

    @pytest.fixture
    def lobby(self, lobby_manager):
        lobby, _ = lobby_manager.join_or_create('Alice', 'a')
        return lobby

    def test_duplicate_session_rejected(self, lobby):
        success, message, player = PlayerManager().add_player(lobby, 'a', 'Again')

        assert success is False
        assert player is None
        assert lobby.player_count == 1

    def test_mark_ready_unknown_player(self, lobby):
        success, _, _ = PlayerManager().mark_ready(lobby, 'ghost')
        assert success is False

    def test_mark_ready_ignored_during_game(self, lobby):
        lobby.game_started = True
        success, _, _ = PlayerManager().mark_ready(lobby, 'a')

        assert success is False
        assert lobby.players[0].ready is False

    def test_reset_players(self, lobby):
        player = lobby.players[0]
        player.ready = True
        player.votes_remaining = 2

        PlayerManager(total_votes=7).reset_players(lobby)

        assert player.ready is False
        assert player.votes_remaining == 7

    def test_custom_max_players(self):
        manager = LobbyManager(max_players=1)
        first, _ = manager.join_or_create('Alice', 'a')
        second, _ = manager.join_or_create('Bob', 'b')

        assert first is not second
