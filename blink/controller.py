"""Blink reminder controller: repeating cue timer with adjustable volume."""

import threading
from typing import Optional

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config import (
    DEBUG,
    DEFAULT_RATE,
    DEFAULT_VOLUME,
    SOUND_FILE,
    clamp_volume,
    interval_for,
)
from .player import CuePlayer, PlaybackUnavailable
from .signals import START_BLINK_TIMER, STOP_BLINK_TIMER, BlinkSignals

# Job ID for the repeating cue
BLINK_JOB_ID = "blink_cue"


class BlinkController:
    """Turns a blink rate into a repeating audible cue."""

    def __init__(
        self,
        scheduler=None,
        player: Optional[CuePlayer] = None,
        rate: int = DEFAULT_RATE,
        volume: float = DEFAULT_VOLUME,
    ):
        """
        Initialize blink controller.

        Args:
            scheduler: APScheduler scheduler to run the cue job on. A
                BackgroundScheduler is created (and later shut down) if omitted.
            player: Cue player; defaults to the bundled blink sound
            rate: Initially selected blink rate
            volume: Initial cue volume
        """
        interval_for(rate)

        self._owns_scheduler = scheduler is None
        if scheduler is None:
            # One worker: cues never overlap
            scheduler = BackgroundScheduler(executors={"default": ThreadPoolExecutor(max_workers=1)})
        self._scheduler = scheduler

        if player is None:
            player = CuePlayer(SOUND_FILE)
        self._player = player
        self._player.volume = volume

        self._lock = threading.RLock()
        self._rate = rate
        self._job = None
        self._closed = False
        self._signals: Optional[BlinkSignals] = None

    # --- Settings ---

    @property
    def rate(self) -> int:
        """Selected blink rate, used by the next start."""
        return self._rate

    @rate.setter
    def rate(self, value: int):
        interval_for(value)
        self._rate = value

    @property
    def interval(self) -> float:
        return interval_for(self._rate)

    @property
    def volume(self) -> float:
        return self._player.volume

    @property
    def is_running(self) -> bool:
        return self._job is not None

    def status(self) -> dict:
        """Snapshot of the reminder state for display."""
        with self._lock:
            job = self._job
            next_cue = job.next_run_time if job is not None else None
            return {
                "running": job is not None,
                "rate": self._rate,
                "interval": self.interval,
                "volume": self.volume,
                "next_cue": next_cue.isoformat() if next_cue else None,
            }

    # --- Timer ---

    def start(self, rate: Optional[int] = None):
        """
        Start (or restart) the repeating cue.

        Args:
            rate: Blinks per minute; defaults to the selected rate
        """
        if rate is None:
            rate = self._rate
        interval = interval_for(rate)

        with self._lock:
            # Only one cue job may be live at a time
            self._cancel_job()

            if not self._scheduler.running:
                self._scheduler.start()

            self._job = self._scheduler.add_job(
                self.play_cue,
                trigger=IntervalTrigger(seconds=interval),
                id=BLINK_JOB_ID,
                replace_existing=True,
                coalesce=True,
                max_instances=1,
            )
            self._rate = rate

        print(f"[Blink] Started: {rate} blinks per minute (every {interval:.1f}s)")

    def stop(self):
        """Stop the repeating cue. Does nothing when already stopped."""
        with self._lock:
            if self._job is None:
                return
            self._cancel_job()

        print("[Blink] Stopped")

    def toggle(self) -> bool:
        """
        Start/stop button: stop when running, otherwise start at the selected rate.

        Returns True if the reminder is now running.
        """
        with self._lock:
            if self._job is not None:
                self.stop()
            else:
                self.start()
            return self.is_running

    def _cancel_job(self):
        """Remove the live cue job, if any. Caller holds the lock."""
        job = self._job
        self._job = None

        if job is None:
            return

        try:
            job.remove()
        except JobLookupError:
            pass  # Scheduler already dropped it

    # --- Audio ---

    def play_cue(self):
        """Play the cue once. Playback failures are logged and skipped."""
        # Held while the stream opens so close() cannot run in between
        with self._lock:
            if self._closed:
                return
            try:
                self._player.play()
            except PlaybackUnavailable as e:
                print(f"[Blink] Failed to play sound: {e}")

    def set_volume(self, volume: float):
        """Change cue volume, including a cue that is playing right now."""
        volume = clamp_volume(volume)
        self._player.volume = volume
        if DEBUG:
            print(f"[Blink] Volume set to {volume:.1f}")

    # --- External signals ---

    def attach(self, signals: BlinkSignals):
        """Listen for start/stop signals until detach() or close()."""
        if self._signals is signals:
            return

        self.detach()
        signals.connect(START_BLINK_TIMER, self._on_start_signal)
        signals.connect(STOP_BLINK_TIMER, self._on_stop_signal)
        self._signals = signals

    def detach(self):
        """Stop listening for start/stop signals."""
        signals = self._signals
        self._signals = None

        if signals is None:
            return

        signals.disconnect(START_BLINK_TIMER, self._on_start_signal)
        signals.disconnect(STOP_BLINK_TIMER, self._on_stop_signal)

    def _on_start_signal(self, sender, rate: Optional[int] = None, **kwargs):
        self.start(rate)

    def _on_stop_signal(self, sender, **kwargs):
        self.stop()

    # --- Lifecycle ---

    def close(self):
        """Tear down: stop listening, stop the timer and any playing cue."""
        self.detach()
        self.stop()

        with self._lock:
            self._closed = True

        if self._owns_scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=True)
            if DEBUG:
                print("[Blink] Scheduler stopped")

        self._player.stop()
