import os
from dotenv import load_dotenv

# Only load the .env file if we're not on Render (i.e., we are in a local environment)
if os.environ.get("RENDER") != "true":
    load_dotenv()

# Flask Configuration
SECRET_KEY = os.getenv('SECRET_KEY', 'a_very_secret_key_that_should_be_changed')
CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

# Game Configuration
MAX_PLAYERS_PER_LOBBY = int(os.getenv('MAX_PLAYERS_PER_LOBBY', 5))
TOTAL_VOTES_PER_PLAYER = int(os.getenv('TOTAL_VOTES_PER_PLAYER', 10))
MOVIES_PER_GAME = int(os.getenv('MOVIES_PER_GAME', 5))
ROUND_ADVANCE_DELAY = float(os.getenv('ROUND_ADVANCE_DELAY', 1.0))  # seconds

# Server Configuration
PORT = int(os.getenv('PORT', 3000))
DEBUG = os.getenv('FLASK_ENV', 'production') == 'development'
