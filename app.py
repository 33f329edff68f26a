"""
Movie Night - A Multiplayer Movie Voting Game Backend

Flask-SocketIO backend that serves the browser client.
Players join a shared lobby, ready up, then spend a limited budget of
votes saying yes or no to a sequence of movies; the lobby's ranking is
broadcast at the end.

App.py is purely server setup and handler registration.
"""

import logging
from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from config import settings
from lobby import LobbyManager, PlayerManager
from game import GameManager, VoteManager
from handlers import register_socket_handlers, register_api_handlers
from utils.constants import GAME_CONFIG

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def create_app(async_mode: str = 'eventlet', **game_options):
    """
    Application factory that creates and configures the Flask app.

    Args:
        async_mode: Flask-SocketIO async mode ('threading' in tests)
        **game_options: Overrides passed to GameManager (catalog,
            round_advance_delay, movies_per_game, rng)

    Returns:
        Configured Flask app with SocketIO
    """

    # Flask configuration
    app = Flask(__name__)
    app.config['SECRET_KEY'] = settings.SECRET_KEY

    # CORS configuration for the browser client
    CORS(app, origins=settings.CORS_ORIGINS.split(','))

    # ProxyFix for deployment behind reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # SocketIO configuration
    socketio = SocketIO(
        app,
        cors_allowed_origins=settings.CORS_ORIGINS.split(','),
        async_mode=async_mode,
        ping_timeout=60,
        ping_interval=25
    )

    # Initialize business logic managers
    logger.info("Initializing business logic managers...")

    lobby_manager = LobbyManager(
        player_manager=PlayerManager(total_votes=GAME_CONFIG['TOTAL_VOTES']),
        max_players=GAME_CONFIG['MAX_PLAYERS']
    )
    game_manager = GameManager(
        lobby_manager,
        socketio,
        vote_manager=VoteManager(),
        **game_options
    )
    app.extensions['movie_night'] = {
        'lobby_manager': lobby_manager,
        'game_manager': game_manager
    }

    # Register handlers (pure routing layer)
    logger.info("Registering handlers...")
    register_socket_handlers(socketio, lobby_manager, game_manager)
    register_api_handlers(app, lobby_manager, game_manager)

    logger.info("Application initialization complete")

    return app, socketio

def main():
    """Main entry point for development server."""

    # Green locks and sockets must be in place before any manager is built
    import eventlet
    eventlet.monkey_patch()

    app, socketio = create_app()

    logger.info(f"Starting Movie Night game server on port {settings.PORT}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"CORS origins: {settings.CORS_ORIGINS}")

    socketio.run(app, debug=settings.DEBUG, port=settings.PORT, host='0.0.0.0')

if __name__ == '__main__':
    main()
