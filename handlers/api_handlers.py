"""
API Route Handlers for Movie Night.

Pure routing layer that delegates to appropriate business logic modules.
Contains no business logic - only request/response handling.
"""

import logging
from flask import jsonify

logger = logging.getLogger(__name__)

def register_api_handlers(app, lobby_manager, game_manager):
    """
    Register all API route handlers.

    Args:
        app: Flask application instance
        lobby_manager: Lobby management instance
        game_manager: Game management instance
    """

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'message': 'Movie Night game server is running',
            'active_lobbies': lobby_manager.lobby_count
        })

    @app.route('/api/lobbies/active')
    def get_active_lobbies():
        """Get list of active lobbies."""
        try:
            lobbies = lobby_manager.get_active_lobbies()
            return jsonify({'lobbies': [lobby.to_dict() for lobby in lobbies]})

        except Exception as e:
            logger.error(f"Error getting active lobbies: {e}")
            return jsonify({'error': 'Failed to get lobbies'}), 500

    @app.route('/api/lobbies/<code>')
    def get_lobby(code):
        """Get one lobby's details."""
        lobby = lobby_manager.get_lobby(code)
        if not lobby:
            return jsonify({'error': 'Lobby not found'}), 404

        with lobby.lock:
            return jsonify({'lobby': lobby.to_dict()})

    @app.route('/api/movies')
    def get_movies():
        """Get the movie catalog games draw from."""
        return jsonify({'movies': [movie.to_dict() for movie in game_manager.catalog]})

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        return jsonify({'error': 'Internal server error'}), 500

    logger.info("API handlers registered successfully")
