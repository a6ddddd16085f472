"""Named start/stop triggers that outside callers broadcast to the controller."""

from typing import Callable

from blinker import NamedSignal

from .config import DEBUG

# Signal names
START_BLINK_TIMER = "start_blink_timer"
STOP_BLINK_TIMER = "stop_blink_timer"
SIGNAL_NAMES = (START_BLINK_TIMER, STOP_BLINK_TIMER)


class BlinkSignals:
    """
    Start/stop triggers for the blink timer.

    Each instance owns its own blinker signals, so a UI layer creates one
    and hands it to whichever controller should listen. Receivers are
    called as `receiver(sender, **kwargs)` with this object as sender.
    """

    def __init__(self):
        self._signals = {name: NamedSignal(name) for name in SIGNAL_NAMES}

    def _signal(self, name: str) -> NamedSignal:
        if name not in self._signals:
            raise ValueError(f"Unknown signal: {name!r}")
        return self._signals[name]

    def connect(self, name: str, receiver: Callable):
        """Register a receiver for a signal. Connecting twice has no effect."""
        # Strong reference: bound methods and lambdas would otherwise be collected
        self._signal(name).connect(receiver, weak=False)

    def disconnect(self, name: str, receiver: Callable):
        """Remove a receiver. Unknown receivers are ignored."""
        self._signal(name).disconnect(receiver)

    def receiver_count(self, name: str) -> int:
        return len(self._signal(name).receivers)

    def send(self, name: str, **kwargs) -> int:
        """
        Call every receiver of a signal with the given keyword arguments.

        Returns the number of receivers called.
        """
        results = self._signal(name).send(self, **kwargs)

        if DEBUG:
            print(f"[Signals] {name} -> {len(results)} receiver(s)")

        return len(results)

    def start_blink_timer(self, rate=None) -> int:
        """Broadcast a start request, optionally with a new rate."""
        if rate is None:
            return self.send(START_BLINK_TIMER)
        return self.send(START_BLINK_TIMER, rate=rate)

    def stop_blink_timer(self) -> int:
        """Broadcast a stop request."""
        return self.send(STOP_BLINK_TIMER)
