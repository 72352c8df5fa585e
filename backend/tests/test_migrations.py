import pytest
from flask_migrate import downgrade, upgrade
from sqlalchemy import inspect

from kittenboard import create_app, db
from kittenboard.services.leaderboard import get_leaderboard


@pytest.fixture()
def migrated_app(tmp_path):
    class MigrationConfig:
        TESTING = True
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'migrated.db'}"
        SQLALCHEMY_TRACK_MODIFICATIONS = False

    application = create_app(MigrationConfig)
    with application.app_context():
        upgrade()
        yield application
        db.session.remove()
        db.engine.dispose()


def test_upgrade_creates_player_table(migrated_app):
    insp = inspect(db.engine)
    assert 'player' in insp.get_table_names()
    columns = {c['name'] for c in insp.get_columns('player')}
    assert {'id', 'username', 'wins', 'created_at'} <= columns
    indexes = {ix['name']: ix for ix in insp.get_indexes('player')}
    assert indexes['ix_player_username']['unique']


def test_migrated_schema_serves_leaderboard(migrated_app):
    service = get_leaderboard(migrated_app)
    service.start_session('Alice')
    service.record_win('Alice')
    assert service.leaderboard().to_list() == [{'rank': 1, 'username': 'Alice', 'wins': 1}]


def test_downgrade_drops_player_table(migrated_app):
    db.session.remove()
    downgrade(revision='base')
    assert 'player' not in inspect(db.engine).get_table_names()
