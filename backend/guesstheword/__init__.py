from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config
from guesstheword.services.games import SessionRegistry

cors = CORS()
socketio = SocketIO(async_mode=None)
# Live game sessions for this process; sessions are never persisted
registry = SessionRegistry()

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    origins = flask_app.config.get('CORS_ORIGINS') or []
    cors.init_app(flask_app, supports_credentials=True, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    registry.max_sessions = flask_app.config.get('MAX_SESSIONS')

    from guesstheword.main import main
    flask_app.register_blueprint(main)

    from guesstheword.api.sessions import sessions
    # Mount session routes under /api to match frontend API client
    flask_app.register_blueprint(sessions, url_prefix='/api/sessions')

    # Register Socket.IO event handlers on the initialized socketio instance
    from guesstheword.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('words')
    def words_command():
        """Prints the word list used by every session."""
        from guesstheword.services.games.words import WORDS
        for word in WORDS:
            click.echo(word)

    flask_app.cli.add_command(words_command)

    return flask_app
