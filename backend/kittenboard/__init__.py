from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
import os
from config import Config

db = SQLAlchemy()
migrate = Migrate()
MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'migrations')
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    db.init_app(flask_app)
    migrate.init_app(flask_app, db, directory=MIGRATIONS_DIR)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Store and hub are owned by the app, not by module globals
    from kittenboard.errors import LeaderboardError, ValidationError
    from kittenboard.services.leaderboard import init_leaderboard
    from kittenboard.services.leaderboard.store import validate_identity
    service = init_leaderboard(flask_app)

    from kittenboard.main import main
    flask_app.register_blueprint(main)

    from kittenboard.api.leaderboard import api
    flask_app.register_blueprint(api, url_prefix='/api')

    from kittenboard.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('LEADERBOARD_NAMESPACE', '/ws'))

    @click.command('db-reset')
    @click.argument('names', nargs=-1)
    def db_reset_command(names):
        """Drops, recreates, and optionally seeds the player table."""
        # Validate before dropping anything
        for name in names:
            try:
                validate_identity(name)
            except ValidationError as exc:
                raise click.BadParameter(f'{name!r}: {exc.message}', param_hint='NAMES')
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            try:
                for name in names:
                    service.start_session(name)
            except LeaderboardError as exc:
                raise click.ClickException(exc.message)
            click.echo(f'Database has been reset ({len(names)} players seeded)')

    @click.command('leaderboard')
    @click.option('--limit', type=int, default=None, help='Number of entries to show.')
    def leaderboard_command(limit):
        """Prints the current top-N leaderboard."""
        with flask_app.app_context():
            try:
                snapshot = service.leaderboard(limit)
            except ValidationError as exc:
                raise click.BadParameter(exc.message, param_hint='--limit')
            except LeaderboardError as exc:
                raise click.ClickException(exc.message)
            if not snapshot.entries:
                click.echo('No players yet.')
                return
            for entry in snapshot.entries:
                click.echo(f'{entry.rank}. {entry.username} {entry.wins}')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(leaderboard_command)

    return flask_app
