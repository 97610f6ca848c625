"""Repeating fixed-interval timers driven by an external millisecond clock.

The host calls :meth:`TimerQueue.advance` once per frame with
``pygame.time.get_ticks()``; tests call it with hand-picked values. Every
callback runs inside ``advance`` so there is exactly one timeline.
"""

import itertools
import logging

logger = logging.getLogger(__name__)


class Timer:
    """Handle for one repeating timer. Callbacks receive it as their only argument."""

    def __init__(self, queue, callback, interval: int, enabled: bool = True):
        if interval <= 0:
            raise ValueError(f"timer interval must be positive, got {interval}")
        self._queue = queue
        self.callback = callback
        self.interval = interval
        self.due = queue.now + interval
        self.cancelled = False
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled and not self.cancelled

    @enabled.setter
    def enabled(self, value: bool):
        if value and not self._enabled:
            self.due = self._queue.now + self.interval
        self._enabled = bool(value)

    def cancel(self):
        """Disable for good; the queue drops the timer on its next pass."""
        self._enabled = False
        self.cancelled = True

    def __repr__(self):
        return f"<Timer interval={self.interval} due={self.due} enabled={self.enabled}>"


class TimerQueue:
    def __init__(self, now: int = 0):
        self.now = now
        self._timers = []
        self._order = itertools.count()
        self._firing = False

    def create(self, callback, interval: int, enabled: bool = True) -> Timer:
        timer = Timer(self, callback, interval, enabled)
        timer.order = next(self._order)
        self._timers.append(timer)
        return timer

    def __len__(self):
        return sum(1 for timer in self._timers if timer.enabled)

    def _next_due(self, now):
        due = [t for t in self._timers if t.enabled and t.due <= now]
        if not due:
            return None
        return min(due, key=lambda t: (t.due, t.order))

    def advance(self, now: int):
        """Fire every timer due up to ``now``, oldest deadline first.

        A timer fires at most once per missed stretch: after a stall it runs once
        and its next deadline is one interval past ``now``.
        """
        if self._firing:
            # A callback asked for time to pass; the outer pass picks it up
            return
        self._firing = True
        try:
            while True:
                timer = self._next_due(now)
                if timer is None:
                    break
                self.now = max(self.now, timer.due)
                timer.due += timer.interval
                timer.callback(timer)
                if timer.due <= now:
                    timer.due = now + timer.interval
            self.now = max(self.now, now)
        finally:
            self._firing = False
            self._timers = [t for t in self._timers if not t.cancelled]

    def step(self, milliseconds: int):
        self.advance(self.now + milliseconds)
