from flask import current_app

from kittenboard.errors import StoreUnavailableError
from kittenboard.models import PlayerRecord
from .hub import BroadcastHub
from .projector import project
from .store import PlayerStore


class WinRecorder:
    """Applies a reported win and fans the new standings out to observers.

    The store lock stays held from the increment through the publish, so
    every observer sees snapshots in the order wins were accepted.
    """

    def __init__(self, store: PlayerStore, hub: BroadcastHub, size: int):
        self.store = store
        self.hub = hub
        self.size = size

    def record_win(self, identity: str) -> PlayerRecord:
        with self.store.lock:
            record = self.store.increment_win(identity)
            current_app.logger.info(f"[win] username={record.username} wins={record.wins}")
            try:
                snapshot = project(self.store.top_n(self.size))
            except StoreUnavailableError:
                # The win is committed; a failed re-read only skips this push
                current_app.logger.warning(f"[broadcast-skip] username={record.username}")
                return record
            self.hub.publish(snapshot)
        return record
