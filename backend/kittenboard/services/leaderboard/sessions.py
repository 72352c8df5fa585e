from flask import current_app

from kittenboard.models import PlayerRecord
from .store import PlayerStore, validate_identity


class SessionRegistrar:
    """Idempotent create-or-fetch of a player when a game starts."""

    def __init__(self, store: PlayerStore, on_started=None):
        self.store = store
        # Called with the record after a session start; used for optional broadcast
        self.on_started = on_started

    def start_session(self, identity: str) -> PlayerRecord:
        validate_identity(identity)
        with self.store.lock:
            record = self.store.get_or_create(identity)
            current_app.logger.info(f"[session-start] username={record.username} wins={record.wins}")
            if self.on_started is not None:
                self.on_started(record)
        return record
