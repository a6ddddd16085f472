"""Blink Reminder remote control Flask Application Factory."""

from flask import Flask

from blink.controller import BlinkController
from blink.signals import BlinkSignals


def create_app(controller: BlinkController, signals: BlinkSignals = None, config=None):
    """
    Create the remote control app around a running controller.

    Start/stop requests are broadcast on `signals`; the controller is
    attached to them here if it is not listening already.
    """
    app = Flask(__name__)

    # Override with custom config if provided
    if config:
        app.config.update(config)

    if signals is None:
        signals = BlinkSignals()
    controller.attach(signals)

    app.extensions["blink_controller"] = controller
    app.extensions["blink_signals"] = signals

    # Register blueprints
    from remote.routes import main_bp
    app.register_blueprint(main_bp)

    return app
