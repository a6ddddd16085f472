"""Tests for BlinkSignals (blink/signals.py)."""

import pytest

from blink.signals import START_BLINK_TIMER, STOP_BLINK_TIMER, BlinkSignals


def test_send_calls_receivers_with_kwargs():
    signals = BlinkSignals()
    received = []
    signals.connect(START_BLINK_TIMER, lambda sender, **kwargs: received.append(kwargs))

    count = signals.send(START_BLINK_TIMER, rate=20)

    assert count == 1
    assert received == [{"rate": 20}]


def test_send_without_receivers():
    assert BlinkSignals().send(STOP_BLINK_TIMER) == 0


def test_signals_are_independent():
    signals = BlinkSignals()
    calls = []
    signals.connect(STOP_BLINK_TIMER, lambda sender: calls.append("stop"))

    signals.start_blink_timer()

    assert calls == []
    assert signals.stop_blink_timer() == 1
    assert calls == ["stop"]


def test_instances_do_not_share_receivers():
    first, second = BlinkSignals(), BlinkSignals()
    first.connect(START_BLINK_TIMER, lambda sender, **kwargs: None)

    assert second.receiver_count(START_BLINK_TIMER) == 0


def test_connect_twice_registers_once():
    signals = BlinkSignals()

    def receiver(sender, **kwargs):
        pass

    signals.connect(START_BLINK_TIMER, receiver)
    signals.connect(START_BLINK_TIMER, receiver)

    assert signals.receiver_count(START_BLINK_TIMER) == 1


def test_disconnect():
    signals = BlinkSignals()
    calls = []

    def receiver(sender):
        calls.append(1)

    signals.connect(STOP_BLINK_TIMER, receiver)
    signals.disconnect(STOP_BLINK_TIMER, receiver)
    signals.disconnect(STOP_BLINK_TIMER, receiver)  # Should handle gracefully
    signals.stop_blink_timer()

    assert calls == []


def test_start_blink_timer_rate_is_optional():
    signals = BlinkSignals()
    received = []
    signals.connect(START_BLINK_TIMER, lambda sender, **kwargs: received.append(kwargs))

    signals.start_blink_timer()
    signals.start_blink_timer(rate=15)

    assert received == [{}, {"rate": 15}]


def test_unknown_signal_name():
    signals = BlinkSignals()

    with pytest.raises(ValueError, match="Unknown signal"):
        signals.connect("pause_blink_timer", lambda: None)
    with pytest.raises(ValueError):
        signals.send("pause_blink_timer")


def test_receiver_gets_signals_object_as_sender():
    signals = BlinkSignals()
    senders = []
    signals.connect(STOP_BLINK_TIMER, lambda sender: senders.append(sender))

    signals.stop_blink_timer()

    assert senders == [signals]


def test_receivers_are_held_strongly():
    import gc

    signals = BlinkSignals()
    calls = []
    signals.connect(STOP_BLINK_TIMER, lambda sender: calls.append(1))
    gc.collect()

    signals.stop_blink_timer()

    assert calls == [1]


def test_built_on_blinker_signals():
    from blinker import NamedSignal

    signals = BlinkSignals()

    assert isinstance(signals._signal(START_BLINK_TIMER), NamedSignal)
    assert signals._signal(STOP_BLINK_TIMER).name == STOP_BLINK_TIMER
