#!/usr/bin/env python3
"""Generate the bundled blink cue (blink/assets/blink_sound.wav)."""

import sys
import wave
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from blink import ASSETS_DIR
from blink.config import SOUND_NAME


def synthesize_cue(
    sample_rate: int = 22050,
    duration: float = 0.15,
    freq_hz: float = 880.0,
    level: float = 0.75,
) -> np.ndarray:
    """
    Synthesize a short soft "pip": a sine with a touch of 2nd harmonic,
    5 ms attack and fast exponential decay.

    Returns int16 mono samples.
    """
    t = np.arange(int(sample_rate * duration)) / sample_rate
    tone = np.sin(2 * np.pi * freq_hz * t) + 0.3 * np.sin(2 * np.pi * 2 * freq_hz * t)
    attack = np.minimum(t / 0.005, 1.0)
    envelope = attack * np.exp(-30.0 * t)
    samples = 0.5 * level * tone * envelope
    return (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)


def write_wav(path: Path, samples: np.ndarray, sample_rate: int = 22050):
    """Write int16 mono samples to a WAV file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(samples.astype("<i2").tobytes())


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Generate the blink cue sound")
    parser.add_argument("--freq", type=float, default=880.0, help="Tone frequency in Hz")
    parser.add_argument("--duration", type=float, default=0.15, help="Length in seconds")
    parser.add_argument("--rate", type=int, default=22050, help="Sample rate")
    parser.add_argument(
        "--output",
        type=Path,
        default=ASSETS_DIR / f"{SOUND_NAME}.wav",
        help="Output WAV path",
    )
    args = parser.parse_args()

    samples = synthesize_cue(args.rate, args.duration, args.freq)
    write_wav(args.output, samples, args.rate)
    print(f"Cue saved to: {args.output} ({len(samples)} samples)")
