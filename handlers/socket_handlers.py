"""
Socket.IO Event Handlers for Movie Night.

Pure routing layer that delegates to appropriate business logic modules.
Contains no business logic - only event routing and room bookkeeping.

Rejected actions are dropped silently: the client gets no error event,
since the server-held state is the only truth and nothing changed.
"""

import logging
from flask import request
from flask_socketio import emit, join_room, leave_room
from utils.constants import CLIENT_EVENTS, SERVER_EVENTS

logger = logging.getLogger(__name__)

def register_socket_handlers(socketio, lobby_manager, game_manager):
    """
    Register all Socket.IO event handlers.

    Args:
        socketio: SocketIO instance
        lobby_manager: Lobby management instance
        game_manager: Game management instance
    """

    @socketio.on('connect')
    def handle_connect():
        """Handle client connection."""
        logger.info(f"Client connected: {request.sid}")

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Handle client disconnection."""
        logger.info(f"Client disconnected: {request.sid}")

        try:
            success, message, _ = game_manager.handle_disconnect(request.sid)
            if not success:
                logger.debug(f"Disconnect of {request.sid} ignored: {message}")

        except Exception as e:
            logger.error(f"Error handling disconnect: {e}")

    @socketio.on(CLIENT_EVENTS['JOIN'])
    def handle_join(data=None):
        """Handle a player asking to be placed in a lobby."""
        try:
            player_sid = request.sid
            username = data.get('name') if isinstance(data, dict) else data

            # A connection belongs to one lobby at a time
            previous_lobby = lobby_manager.get_player_lobby(player_sid)
            if previous_lobby:
                leave_room(previous_lobby.code)
                game_manager.handle_disconnect(player_sid)

            emit(SERVER_EVENTS['IDENTITY_ASSIGNED'], player_sid)

            lobby, player = lobby_manager.join_or_create(username, player_sid)
            join_room(lobby.code)

            game_manager.broadcast_roster(lobby)

            logger.info(f"Player {player.username} joined lobby {lobby.code}")

        except Exception as e:
            logger.error(f"Error joining lobby: {e}")

    @socketio.on(CLIENT_EVENTS['READY'])
    def handle_ready(data=None):
        """Handle a player readying up."""
        try:
            success, message, result_data = game_manager.handle_ready(request.sid)
            if not success:
                logger.debug(f"Ready from {request.sid} ignored: {message}")
            elif result_data.get('game_started'):
                logger.info(f"Started game in lobby {result_data['lobby_code']}")

        except Exception as e:
            logger.error(f"Error handling ready: {e}")

    @socketio.on(CLIENT_EVENTS['VOTE'])
    def handle_vote(data=None):
        """Handle vote being cast."""
        try:
            success, message, _ = game_manager.handle_vote(request.sid, data)
            if not success:
                logger.debug(f"Vote from {request.sid} rejected: {message}")

        except Exception as e:
            logger.error(f"Error handling vote: {e}")

    @socketio.on(CLIENT_EVENTS['RESTART'])
    def handle_restart(data=None):
        """Handle a request to play again."""
        try:
            success, message, _ = game_manager.handle_restart(request.sid)
            if not success:
                logger.debug(f"Restart from {request.sid} ignored: {message}")

        except Exception as e:
            logger.error(f"Error handling restart: {e}")

    logger.info("Socket.IO handlers registered successfully")
