from unittest.mock import MagicMock

from gridsnake.events import Signal


class TestSignal:

    def test_listeners_called_in_subscription_order(self):
        signal = Signal("test")
        calls = []
        signal.connect(lambda value: calls.append(("a", value)))
        signal.connect(lambda value: calls.append(("b", value)))

        signal.emit(3)

        assert calls == [("a", 3), ("b", 3)]

    def test_connect_is_idempotent(self):
        signal = Signal("test")
        listener = MagicMock()
        signal.connect(listener)
        signal.connect(listener)

        signal.emit()

        assert len(signal) == 1
        listener.assert_called_once_with()

    def test_listener_may_disconnect_itself(self):
        signal = Signal("test")
        later = MagicMock()

        def once():
            signal.disconnect(once)

        signal.connect(once)
        signal.connect(later)
        signal.emit()
        signal.emit()

        assert len(signal) == 1
        assert later.call_count == 2

    def test_disconnect_unknown_listener_is_ignored(self):
        signal = Signal("test")
        signal.disconnect(print)
        assert len(signal) == 0
