"""Shared fixtures: spy scheduler, fake player and fake output stream."""

import threading
import wave
from datetime import datetime
from pathlib import Path

import numpy as np
import pytest
from apscheduler.jobstores.base import JobLookupError

from blink.player import PlaybackUnavailable


class SpyJob:
    """Stands in for an APScheduler Job."""

    def __init__(self, scheduler, func, trigger, id, kwargs):
        self._scheduler = scheduler
        self.func = func
        self.trigger = trigger
        self.id = id
        self.kwargs = kwargs
        self.next_run_time = datetime.now() + trigger.interval
        self.removed = False

    def remove(self):
        if self not in self._scheduler.live_jobs:
            raise JobLookupError(self.id)
        self._scheduler.live_jobs.remove(self)
        self.removed = True


class SpyScheduler:
    """Records jobs instead of running them, so live handles can be counted."""

    def __init__(self):
        self.running = False
        self.start_calls = 0
        self.added: list[SpyJob] = []
        self.live_jobs: list[SpyJob] = []

    def start(self):
        self.running = True
        self.start_calls += 1

    def shutdown(self, wait=True):
        self.running = False

    def add_job(self, func, trigger=None, id=None, **kwargs):
        job = SpyJob(self, func, trigger, id, kwargs)
        self.added.append(job)
        self.live_jobs.append(job)
        return job

    def fire(self):
        """Run every live job once, like one timer tick."""
        for job in list(self.live_jobs):
            job.func()


class FakePlayer:
    """Counts cue attempts; can be told to fail like a missing sound file."""

    def __init__(self, fail=False):
        self.fail = fail
        self.volume = 1.0
        self.play_calls = 0
        self.played_volumes: list[float] = []
        self.stop_calls = 0
        self.played = threading.Event()

    def play(self):
        self.play_calls += 1
        self.played.set()
        if self.fail:
            raise PlaybackUnavailable("Sound file not found: blink_sound.wav")
        self.played_volumes.append(self.volume)

    def stop(self):
        self.stop_calls += 1


class FakeStream:
    """Stands in for sounddevice.OutputStream."""

    instances: list["FakeStream"] = []

    def __init__(self, samplerate, channels, dtype, device, callback):
        self.samplerate = samplerate
        self.channels = channels
        self.dtype = dtype
        self.device = device
        self.callback = callback
        self.active = False
        self.closed = False
        FakeStream.instances.append(self)

    def start(self):
        self.active = True

    def stop(self):
        self.active = False

    def close(self):
        self.closed = True

    def pull(self, frames):
        """Ask the player for one block of output, like the audio thread does."""
        outdata = np.zeros((frames, self.channels), dtype=np.float32)
        self.callback(outdata, frames, None, None)
        return outdata


def write_wav(path: Path, samples, sample_rate=8000, channels=1, sample_width=2):
    """Write raw integer samples to a WAV file."""
    dtypes = {1: np.uint8, 2: "<i2", 4: "<i4"}
    data = np.asarray(samples, dtype=dtypes.get(sample_width, np.uint8))
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(sample_width)
        wav.setframerate(sample_rate)
        wav.writeframes(data.tobytes())
    return path


@pytest.fixture
def spy_scheduler():
    return SpyScheduler()


@pytest.fixture
def fake_player():
    return FakePlayer()


@pytest.fixture
def fake_stream():
    FakeStream.instances = []
    yield FakeStream
    FakeStream.instances = []


@pytest.fixture
def cue_file(tmp_path: Path) -> Path:
    """A short 16-bit mono cue: a ramp of 64 samples."""
    samples = np.arange(64, dtype=np.int16) * 256
    return write_wav(tmp_path / "blink_sound.wav", samples)


@pytest.fixture
def wav_writer():
    return write_wav
