from flask import current_app, request
from kittenboard import socketio
from kittenboard.errors import StoreUnavailableError
from kittenboard.services.leaderboard import Observer, get_leaderboard

LEADERBOARD_EVENT = 'leaderboardUpdated'


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def socket_observer(sid: str, namespace: str) -> Observer:
    """Observer that pushes snapshots to a single Socket.IO session."""
    def deliver(snapshot):
        socketio.emit(LEADERBOARD_EVENT, snapshot.to_list(), to=sid, namespace=namespace)
    return Observer(key=sid, deliver=deliver)


def handle_connect():
    sid = _get_sid()
    current_app.logger.info(f"[connect] sid={sid}")
    # New observers get the current standings right away, and only they do
    try:
        get_leaderboard().subscribe(socket_observer(sid, request.namespace))
    except StoreUnavailableError as exc:
        current_app.logger.warning(f"[connect-refused] sid={sid} error={exc.message}")
        return False


def handle_disconnect(*args):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid}")
    get_leaderboard().unsubscribe(sid)


def handle_update_leaderboard(data=None):
    get_leaderboard().refresh()


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on the leaderboard namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('updateLeaderboard', handle_update_leaderboard, namespace=namespace)
