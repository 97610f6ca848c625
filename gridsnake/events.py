"""Tiny observer list used for engine and snake notifications."""

import logging

logger = logging.getLogger(__name__)


class Signal:
    """An explicit list of listeners, called in subscription order."""

    def __init__(self, name: str):
        self.name = name
        self._listeners = []

    def connect(self, listener):
        if listener not in self._listeners:
            self._listeners.append(listener)
        return listener

    def disconnect(self, listener):
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def emit(self, *args):
        logger.debug("emit %s", self.name)
        # Copy so listeners may disconnect themselves while being called
        for listener in list(self._listeners):
            listener(*args)

    def __len__(self):
        return len(self._listeners)

    def __repr__(self):
        return f"<Signal {self.name} listeners={len(self._listeners)}>"
