"""
Game constants for Movie Night.

This module contains all constant values used throughout the game,
including the default movie catalog, wire event names, and configuration values.
"""

from config import settings

# Default movie catalog, read-only
MOVIE_CATALOG = [
    {'id': 1, 'title': "Inception", 'poster': "https://via.placeholder.com/200x300", 'description': "Sci-fi thriller"},
    {'id': 2, 'title': "The Matrix", 'poster': "https://via.placeholder.com/200x300", 'description': "Virtual reality sci-fi"},
    {'id': 3, 'title': "Titanic", 'poster': "https://via.placeholder.com/200x300", 'description': "Romantic tragedy"},
    {'id': 4, 'title': "The Godfather", 'poster': "https://via.placeholder.com/200x300", 'description': "Mafia classic"},
    {'id': 5, 'title': "The Shawshank Redemption", 'poster': "https://via.placeholder.com/200x300", 'description': "Prison drama masterpiece"},
    {'id': 6, 'title': "Pulp Fiction", 'poster': "https://via.placeholder.com/200x300", 'description': "Tarantino's iconic film"}
]

# Vote values a player may cast on a movie
VOTE_VALUES = ('yes', 'no')

# Inbound Socket.IO events (names expected by the browser client)
CLIENT_EVENTS = {
    'JOIN': 'createOrJoinLobby',
    'READY': 'playerReady',
    'VOTE': 'vote',
    'RESTART': 'restart'
}

# Outbound Socket.IO events
SERVER_EVENTS = {
    'IDENTITY_ASSIGNED': 'playerAssigned',
    'ROSTER_UPDATED': 'lobbyUpdated',
    'GAME_STARTED': 'gameStart',
    'ROUND_ADVANCED': 'nextMovie',
    'VOTE_RECORDED': 'voteUpdate',
    'RESULTS_READY': 'showResults',
    'ROSTER_RESET': 'lobbyReset'
}

# Player name limits
MAX_NAME_LENGTH = 20
DEFAULT_PLAYER_NAME = 'Player'

# Game configuration
GAME_CONFIG = {
    'MIN_PLAYERS': 2,
    'MAX_PLAYERS': settings.MAX_PLAYERS_PER_LOBBY,
    'TOTAL_VOTES': settings.TOTAL_VOTES_PER_PLAYER,
    'MOVIES_PER_GAME': settings.MOVIES_PER_GAME,
    'ROUND_ADVANCE_DELAY': settings.ROUND_ADVANCE_DELAY  # seconds
}
