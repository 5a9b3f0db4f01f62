"""
Debounced recomputation.
Every request takes a fresh token; a deferred run only goes ahead if no
newer request arrived in the meantime.
"""

from itertools import count

from PySide6.QtCore import QTimer


class DecorationScheduler:
    """Delays a callback and drops all but the most recent pending request."""

    def __init__(self, delay_ms=250, single_shot=None):
        self.delay_ms = delay_ms
        # single_shot(ms, fn) defers fn; QTimer on the Qt event loop unless a test injects one
        self.single_shot = single_shot or QTimer.singleShot
        self._tokens = count(1)
        self.last_token = 0

    def schedule(self, callback, *args):
        """Run callback(*args) after delay_ms unless superseded; returns the request token."""
        token = next(self._tokens)
        self.last_token = token
        self.single_shot(self.delay_ms, lambda: self._fire(token, callback, args))
        return token

    def is_current(self, token: int) -> bool:
        return token == self.last_token

    def cancel(self):
        """Drop every pending request."""
        self.last_token = next(self._tokens)

    def _fire(self, token, callback, args):
        if self.is_current(token):
            callback(*args)
