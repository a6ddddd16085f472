"""Blink reminder: plays a short cue at a steady rate so you remember to blink."""

from pathlib import Path

# Base paths
BLINK_DIR = Path(__file__).parent
PROJECT_DIR = BLINK_DIR.parent
ASSETS_DIR = BLINK_DIR / "assets"
CONFIG_FILE = PROJECT_DIR / "data" / "blink_config.json"
