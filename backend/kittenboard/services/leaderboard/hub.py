import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, List, Optional, Union


@dataclass(eq=False)
class Observer:
    """A live subscriber. ``deliver`` pushes one snapshot down its channel."""
    key: str
    deliver: Callable[[object], None]
    connected_at: float = field(default_factory=time.time)
    # Snapshots handed over but not yet delivered, oldest first
    pending: Deque[object] = field(default_factory=deque, repr=False)
    draining: bool = field(default=False, repr=False)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class BroadcastHub:
    """Fan-out of leaderboard snapshots to connected observers.

    Each observer has its own ordered queue. With a ``spawn`` callable
    (e.g. ``socketio.start_background_task``) the queue is drained in a
    background task, so ``publish`` never waits on a slow observer; without
    one, delivery happens inline. A failed push is logged and the observer
    is dropped, but the remaining observers still receive the snapshot.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, spawn: Optional[Callable] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.spawn = spawn
        self._observers: Dict[str, Observer] = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._observers)

    def observers(self) -> List[Observer]:
        with self._lock:
            return list(self._observers.values())

    def is_registered(self, observer: Observer) -> bool:
        with self._lock:
            return self._observers.get(observer.key) is observer

    def subscribe(self, observer: Observer, snapshot=None) -> Observer:
        with self._lock:
            self._observers[observer.key] = observer
        self.logger.info(f"[subscribe] observer={observer.key} total={len(self)}")
        if snapshot is not None:
            self._dispatch(observer, snapshot)
        return observer

    def unsubscribe(self, handle: Union[Observer, str, None]) -> bool:
        key = handle.key if isinstance(handle, Observer) else handle
        with self._lock:
            current = self._observers.get(key)
            # A reconnect may have reused the key; only drop the same observer
            if current is None or (isinstance(handle, Observer) and current is not handle):
                return False
            del self._observers[key]
        self.logger.info(f"[unsubscribe] observer={key}")
        return True

    def publish(self, snapshot) -> int:
        """Hand ``snapshot`` to every observer; returns how many accepted it."""
        accepted = 0
        for observer in self.observers():
            if self._dispatch(observer, snapshot):
                accepted += 1
        self.logger.debug(f"[broadcast] accepted={accepted} entries={len(snapshot)}")
        return accepted

    def close(self) -> None:
        with self._lock:
            dropped = list(self._observers.values())
            self._observers.clear()
        for observer in dropped:
            with observer.lock:
                observer.pending.clear()
        self.logger.info(f"[hub-close] dropped={len(dropped)}")

    def _dispatch(self, observer: Observer, snapshot) -> bool:
        if self.spawn is None:
            return self._push(observer, snapshot)
        with observer.lock:
            observer.pending.append(snapshot)
            if observer.draining:
                return True
            observer.draining = True
        try:
            self.spawn(self._drain, observer)
        except Exception as exc:
            self.logger.warning(f"[broadcast-fail] observer={observer.key} error={exc!r}")
            with observer.lock:
                observer.pending.clear()
                observer.draining = False
            return False
        return True

    def _drain(self, observer: Observer) -> None:
        while True:
            with observer.lock:
                if not observer.pending or not self.is_registered(observer):
                    observer.pending.clear()
                    observer.draining = False
                    return
                snapshot = observer.pending.popleft()
            if not self._push(observer, snapshot):
                with observer.lock:
                    observer.pending.clear()
                    observer.draining = False
                return

    def _push(self, observer: Observer, snapshot) -> bool:
        try:
            observer.deliver(snapshot)
            return True
        except Exception as exc:
            self.logger.warning(f"[broadcast-fail] observer={observer.key} error={exc!r}")
            self.unsubscribe(observer)
            return False
