"""Blink reminder against a real APScheduler BackgroundScheduler."""

import time
from datetime import datetime, timedelta

import pytest

from blink.controller import BlinkController


@pytest.fixture
def live_controller(fake_player):
    controller = BlinkController(player=fake_player)
    yield controller
    controller.close()


def test_first_cue_due_one_interval_after_start(live_controller):
    before = datetime.now().astimezone()
    live_controller.start(20)

    job = live_controller._scheduler.get_jobs()[0]
    delay = job.next_run_time - before

    assert job.trigger.interval == timedelta(seconds=3)
    assert timedelta(seconds=2.5) < delay < timedelta(seconds=3.5)


def test_restart_replaces_job(live_controller):
    live_controller.start(15)
    live_controller.start(20)
    live_controller.start(15)

    assert len(live_controller._scheduler.get_jobs()) == 1


def test_stop_removes_job(live_controller):
    live_controller.start(15)
    live_controller.stop()

    assert live_controller._scheduler.get_jobs() == []


@pytest.mark.slow
def test_cue_plays_then_stops(live_controller, fake_player):
    started = time.monotonic()
    live_controller.start(15)

    assert fake_player.played.wait(timeout=6.0)
    elapsed = time.monotonic() - started
    assert 3.5 < elapsed < 6.0

    live_controller.stop()
    plays = fake_player.play_calls
    time.sleep(4.5)

    assert fake_player.play_calls == plays
