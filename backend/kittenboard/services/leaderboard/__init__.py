"""Leaderboard domain services: player store, ranking and live fan-out.

Routes and socket handlers go through the ``LeaderboardService`` the app
factory stores on ``app.extensions``, keeping transport concerns apart
from the store and the hub.
"""
from flask import current_app

from .hub import BroadcastHub, Observer
from .projector import LeaderboardEntry, LeaderboardSnapshot, project
from .service import LeaderboardService
from .store import PlayerStore

EXTENSION_KEY = 'kittenboard'


def init_leaderboard(app) -> LeaderboardService:
    from kittenboard import socketio
    # Deliver inline in TESTING so test clients see pushes synchronously
    if app.config.get('TESTING') and not app.config.get('ENABLE_ASYNC_BROADCAST_IN_TESTS'):
        spawn = None
    else:
        spawn = socketio.start_background_task
    service = LeaderboardService(
        PlayerStore(),
        BroadcastHub(logger=app.logger, spawn=spawn),
        size=int(app.config.get('LEADERBOARD_SIZE', 10)),
        max_size=int(app.config.get('LEADERBOARD_MAX_SIZE', 100)),
        broadcast_on_session_start=bool(app.config.get('BROADCAST_ON_SESSION_START')),
    )
    app.extensions[EXTENSION_KEY] = service
    return service


def get_leaderboard(app=None) -> LeaderboardService:
    app = app or current_app
    return app.extensions[EXTENSION_KEY]


__all__ = [
    'BroadcastHub',
    'LeaderboardEntry',
    'LeaderboardService',
    'LeaderboardSnapshot',
    'Observer',
    'PlayerStore',
    'get_leaderboard',
    'init_leaderboard',
    'project',
]
