"""Configuration for the blink reminder."""

import json
import os
from pathlib import Path

from . import ASSETS_DIR, CONFIG_FILE

# Blink rate (blinks per minute) - the picker only offers these two
BLINK_RATES = (15, 20)
DEFAULT_RATE = 15
SECONDS_PER_MINUTE = 60.0

# Volume slider: 0.0 - 1.0 in steps of 0.1
VOLUME_MIN = 0.0
VOLUME_MAX = 1.0
VOLUME_STEP = 0.1
DEFAULT_VOLUME = 1.0

# Bundled cue sound, loaded at playback time
SOUND_NAME = "blink_sound"
SOUND_FILE = Path(os.environ.get("BLINK_SOUND", str(ASSETS_DIR / f"{SOUND_NAME}.wav")))

# Output device - set to None for default, or specify device index
# Use `python -c "import sounddevice; print(sounddevice.query_devices())"` to list
AUDIO_OUTPUT_DEVICE = os.environ.get("BLINK_AUDIO_DEVICE", None)  # None = default playback device
if AUDIO_OUTPUT_DEVICE is not None:
    AUDIO_OUTPUT_DEVICE = int(AUDIO_OUTPUT_DEVICE)

# Remote control API
API_HOST = os.environ.get("BLINK_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("BLINK_PORT", "5050"))

# Debug settings
DEBUG = os.environ.get("BLINK_DEBUG", "0") == "1"


def interval_for(rate: int) -> float:
    """
    Seconds between cues for a blink rate.

    Raises ValueError for rates the picker does not offer.
    """
    if rate not in BLINK_RATES:
        raise ValueError(f"Blink rate must be one of {BLINK_RATES}, got {rate!r}")
    return SECONDS_PER_MINUTE / rate


def clamp_volume(volume: float) -> float:
    """Clamp a volume into the 0.0 - 1.0 range."""
    return max(VOLUME_MIN, min(VOLUME_MAX, float(volume)))


def snap_volume(volume: float) -> float:
    """Clamp and round a volume to the nearest slider step."""
    steps = round(clamp_volume(volume) / VOLUME_STEP)
    return round(steps * VOLUME_STEP, 1)


def load_config(path: Path = CONFIG_FILE) -> dict:
    """Load startup defaults from JSON file, falling back to built-in values."""
    default_config = {
        "rate": DEFAULT_RATE,
        "volume": DEFAULT_VOLUME,
    }

    if not path.exists():
        return default_config

    try:
        with open(path, "r") as f:
            config = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        print(f"[Config] Error loading config: {e}")
        return default_config

    if not isinstance(config, dict):
        print(f"[Config] Ignoring config, expected an object: {path}")
        return default_config

    # Merge with defaults for any missing keys
    merged = {**default_config, **config}

    if merged["rate"] not in BLINK_RATES:
        print(f"[Config] Invalid rate {merged['rate']!r}, using {DEFAULT_RATE}")
        merged["rate"] = DEFAULT_RATE

    try:
        merged["volume"] = clamp_volume(merged["volume"])
    except (TypeError, ValueError):
        print(f"[Config] Invalid volume {merged['volume']!r}, using {DEFAULT_VOLUME}")
        merged["volume"] = DEFAULT_VOLUME

    return merged
