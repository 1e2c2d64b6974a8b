# Single-slot "latest value wins" hand-off between a scoring worker and a renderer
import threading
from typing import Optional

from posture_engine.models import DisplaySnapshot


class LatestSnapshot:
    """
    One-slot mailbox. publish() overwrites whatever the reader has not
    taken yet; the overwritten snapshot is counted in `dropped`.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Optional[DisplaySnapshot] = None
        self.dropped = 0

    def publish(self, snapshot: DisplaySnapshot) -> None:
        with self._lock:
            if self._value is not None:
                self.dropped += 1
            self._value = snapshot

    def take(self) -> Optional[DisplaySnapshot]:
        """Return the newest snapshot and empty the slot (None if nothing new)"""
        with self._lock:
            value, self._value = self._value, None
            return value

    def peek(self) -> Optional[DisplaySnapshot]:
        with self._lock:
            return self._value
