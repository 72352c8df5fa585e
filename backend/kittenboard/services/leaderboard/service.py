from typing import Optional

from kittenboard.errors import ValidationError
from kittenboard.models import PlayerRecord
from .hub import BroadcastHub, Observer
from .projector import LeaderboardSnapshot, project
from .sessions import SessionRegistrar
from .store import PlayerStore, validate_size
from .wins import WinRecorder


class LeaderboardService:
    """Boundary operations used by HTTP routes, socket handlers and the CLI."""

    def __init__(self, store: PlayerStore, hub: BroadcastHub, size: int = 10,
                 max_size: int = 100, broadcast_on_session_start: bool = False):
        self.store = store
        self.hub = hub
        self.size = validate_size(size)
        self.max_size = max(validate_size(max_size), self.size)
        self.registrar = SessionRegistrar(
            store, on_started=self._after_session_start if broadcast_on_session_start else None
        )
        self.recorder = WinRecorder(store, hub, self.size)

    def start_session(self, identity: str) -> PlayerRecord:
        return self.registrar.start_session(identity)

    def record_win(self, identity: str) -> PlayerRecord:
        return self.recorder.record_win(identity)

    def leaderboard(self, n: Optional[int] = None) -> LeaderboardSnapshot:
        n = self.size if n is None else validate_size(n)
        if n > self.max_size:
            raise ValidationError(f'limit must be at most {self.max_size}')
        return project(self.store.top_n(n))

    def current_snapshot(self) -> LeaderboardSnapshot:
        return self.leaderboard(self.size)

    def subscribe(self, observer: Observer) -> Observer:
        # Snapshot and registration happen under the store lock so a
        # concurrent win cannot be pushed ahead of the initial snapshot
        with self.store.lock:
            return self.hub.subscribe(observer, self.current_snapshot())

    def unsubscribe(self, handle) -> bool:
        return self.hub.unsubscribe(handle)

    def refresh(self) -> int:
        """Re-broadcast the current standings to every observer."""
        with self.store.lock:
            return self.hub.publish(self.current_snapshot())

    def close(self) -> None:
        self.hub.close()

    def _after_session_start(self, record: PlayerRecord) -> None:
        self.hub.publish(self.current_snapshot())
