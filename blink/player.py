"""Cue playback using sounddevice."""

import threading
import wave
from pathlib import Path
from typing import Callable, Optional

import numpy as np

from .config import AUDIO_OUTPUT_DEVICE, DEBUG, DEFAULT_VOLUME, clamp_volume

# Audio output available flag
AUDIO_AVAILABLE = False

try:
    import sounddevice as sd
    AUDIO_AVAILABLE = True
except ImportError as e:
    sd = None
    print(f"[Player] sounddevice not available: {e}")
except OSError as e:
    # Raised when the PortAudio library itself is missing
    sd = None
    print(f"[Player] PortAudio not available: {e}")


class PlaybackUnavailable(Exception):
    """The cue sound could not be loaded or played."""


def load_clip(path: Path) -> tuple[np.ndarray, int]:
    """
    Read a PCM WAV file into float32 frames.

    Returns:
        (frames, sample_rate) where frames has shape (n_frames, channels)
        and values in -1.0 .. 1.0

    Raises:
        PlaybackUnavailable: file missing, unreadable, empty or unsupported
    """
    path = Path(path)
    if not path.exists():
        raise PlaybackUnavailable(f"Sound file not found: {path}")

    try:
        with wave.open(str(path), "rb") as wav:
            channels = wav.getnchannels()
            sample_width = wav.getsampwidth()
            sample_rate = wav.getframerate()
            raw = wav.readframes(wav.getnframes())
    except (wave.Error, EOFError, OSError) as e:
        raise PlaybackUnavailable(f"Could not read {path}: {e}") from e

    # 8-bit WAV is unsigned, wider formats are signed little-endian
    if sample_width == 1:
        data = (np.frombuffer(raw, dtype=np.uint8).astype(np.float32) - 128.0) / 128.0
    elif sample_width == 2:
        data = np.frombuffer(raw, dtype="<i2").astype(np.float32) / 32768.0
    elif sample_width == 4:
        data = np.frombuffer(raw, dtype="<i4").astype(np.float32) / 2147483648.0
    else:
        raise PlaybackUnavailable(f"Unsupported sample width: {sample_width} bytes")

    if data.size == 0:
        raise PlaybackUnavailable(f"Sound file is empty: {path}")

    return data.reshape(-1, channels), sample_rate


class CuePlayer:
    """Plays the cue once per call, replacing any cue still playing."""

    def __init__(
        self,
        sound_file: Path,
        volume: float = DEFAULT_VOLUME,
        device: Optional[int] = AUDIO_OUTPUT_DEVICE,
        stream_factory: Optional[Callable] = None,
    ):
        """
        Initialize cue player.

        Args:
            sound_file: WAV file to play for each cue
            volume: Initial volume 0.0 - 1.0
            device: sounddevice output device index, None for default
            stream_factory: Callable with the sounddevice.OutputStream
                signature; defaults to sounddevice.OutputStream
        """
        self.sound_file = Path(sound_file)
        self.device = device
        self._stream_factory = stream_factory
        if self._stream_factory is None and AUDIO_AVAILABLE:
            self._stream_factory = sd.OutputStream

        self._lock = threading.Lock()
        self._volume = clamp_volume(volume)
        self._stream = None
        self._clip: Optional[np.ndarray] = None
        self._position = 0

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float):
        # The audio callback reads this every block, so a playing cue follows along
        with self._lock:
            self._volume = clamp_volume(value)

    @property
    def is_playing(self) -> bool:
        """Check if a cue is currently playing."""
        stream = self._stream
        return stream is not None and bool(stream.active)

    def play(self):
        """
        Load the cue and start playing it.

        Raises:
            PlaybackUnavailable: sound could not be loaded or the stream failed
        """
        if self._stream_factory is None:
            raise PlaybackUnavailable("Audio output not available")

        clip, sample_rate = load_clip(self.sound_file)

        # Drop the previous cue rather than queueing behind it
        self.stop()

        with self._lock:
            self._clip = clip
            self._position = 0

        try:
            stream = self._stream_factory(
                samplerate=sample_rate,
                channels=clip.shape[1],
                dtype="float32",
                device=self.device,
                callback=self._callback,
            )
            stream.start()
        except Exception as e:
            with self._lock:
                self._clip = None
            raise PlaybackUnavailable(f"Could not start playback: {e}") from e

        self._stream = stream
        if DEBUG:
            print(f"[Player] Playing {self.sound_file.name} at volume {self._volume:.1f}")

    def stop(self):
        """Stop and release the current cue, if any."""
        stream = self._stream
        self._stream = None

        if stream is None:
            return

        try:
            stream.stop()
            stream.close()
        except Exception as e:
            print(f"[Player] Error stopping playback: {e}")

        with self._lock:
            self._clip = None
            self._position = 0

    def _callback(self, outdata, frames, time_info, status):
        """Fill one output block from the clip at the current volume."""
        if status and DEBUG:
            print(f"[Player] Audio status: {status}")

        with self._lock:
            clip = self._clip
            if clip is None:
                outdata.fill(0)
                self._finish()
                return
            start = self._position
            chunk = clip[start:start + frames]
            self._position = start + len(chunk)
            volume = self._volume

        outdata[:len(chunk)] = chunk * volume
        if len(chunk) < frames:
            outdata[len(chunk):] = 0
            self._finish()

    def _finish(self):
        """Tell PortAudio the cue is over."""
        if sd is not None:
            raise sd.CallbackStop
