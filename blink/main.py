#!/usr/bin/env python3
"""
Blink reminder service.

Usage:
    python -m blink.main                  # Start reminding at the configured rate
    python -m blink.main --rate 20        # 20 blinks per minute
    python -m blink.main --web            # Also serve the remote control API
    python -m blink.main --web --no-start # Wait for a start request
    python -m blink.main --debug          # Enable debug output
"""

import argparse
import os
import signal
import sys
import time

# Global controller reference for signal handler
_controller = None


def signal_handler(signum, frame):
    """Handle shutdown signals."""
    print("\n[Blink] Shutting down...")
    if _controller is not None:
        _controller.close()
    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Blink reminder: a short sound at a steady blink rate")
    parser.add_argument("--rate", type=int, choices=[15, 20], help="Blinks per minute")
    parser.add_argument("--volume", type=float, help="Cue volume, 0.0 - 1.0")
    parser.add_argument("--web", action="store_true", help="Serve the remote control API")
    parser.add_argument("--host", help="Remote control host")
    parser.add_argument("--port", type=int, help="Remote control port")
    parser.add_argument("--no-start", action="store_true", help="Do not start reminding right away")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    return parser


def main(argv=None):
    """Main entry point."""
    global _controller

    args = build_parser().parse_args(argv)

    # Set debug mode before imports
    if args.debug:
        os.environ["BLINK_DEBUG"] = "1"

    # Now import modules (they read DEBUG from env)
    from blink.config import API_HOST, API_PORT, DEBUG, SOUND_FILE, load_config
    from blink.controller import BlinkController
    from blink.player import AUDIO_AVAILABLE, CuePlayer
    from blink.signals import BlinkSignals

    config = load_config()
    rate = args.rate if args.rate is not None else config["rate"]
    volume = args.volume if args.volume is not None else config["volume"]

    # Set up signal handlers
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    print("=" * 50)
    print("Blink Reminder")
    print("=" * 50)
    print(f"Blink rate: {rate} per minute")
    print(f"Volume: {volume:.1f}")
    print(f"Sound: {SOUND_FILE}")
    if not AUDIO_AVAILABLE:
        print("Audio output not available - cues will be skipped")
    print("Debug:", "ON" if DEBUG else "OFF")
    print()

    signals = BlinkSignals()
    _controller = BlinkController(player=CuePlayer(SOUND_FILE), rate=rate, volume=volume)
    _controller.attach(signals)

    if not args.no_start:
        signals.start_blink_timer(rate=rate)

    try:
        if args.web:
            from remote import create_app

            host = args.host or API_HOST
            port = args.port or API_PORT
            app = create_app(_controller, signals)
            print(f"Remote control on http://{host}:{port}/api/status")
            app.run(host=host, port=port, debug=False, use_reloader=False)
        else:
            print("Blink reminder running. Press Ctrl+C to stop.")
            while True:
                time.sleep(60)
    except KeyboardInterrupt:
        pass
    finally:
        _controller.close()


if __name__ == "__main__":
    main()
