"""Flask routes for the blink reminder remote control."""

from flask import Blueprint, current_app, jsonify, request

from blink.config import DEBUG
from blink.controller import BlinkController
from blink.signals import BlinkSignals
from remote.validation import validate_rate, validate_volume

main_bp = Blueprint("main", __name__)


def _controller() -> BlinkController:
    return current_app.extensions["blink_controller"]


def _signals() -> BlinkSignals:
    return current_app.extensions["blink_signals"]


def _status_response(**extra):
    return jsonify({"status": "ok", **_controller().status(), **extra})


def _error(message: str, code: int = 400):
    return jsonify({"status": "error", "message": message}), code


def _json_body():
    """Request JSON as a dict; None when the body is not a JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        return None
    return data


@main_bp.route("/api/status")
def get_status():
    """Current reminder state."""
    return _status_response()


@main_bp.route("/api/start", methods=["POST"])
def start_blinking():
    """Start (or restart) the reminder, optionally at a new rate."""
    data = _json_body()
    if data is None:
        return _error("Expected a JSON object")

    if data.get("rate") is not None:
        validation = validate_rate(data["rate"])
        if not validation.is_valid:
            return _error(validation.error_message)
        _controller().rate = validation.value

    receivers = _signals().start_blink_timer(rate=_controller().rate)
    if DEBUG:
        print(f"[Remote] Start sent to {receivers} receiver(s)")

    return _status_response()


@main_bp.route("/api/stop", methods=["POST"])
def stop_blinking():
    """Stop the reminder."""
    receivers = _signals().stop_blink_timer()
    if DEBUG:
        print(f"[Remote] Stop sent to {receivers} receiver(s)")

    return _status_response()


@main_bp.route("/api/toggle", methods=["POST"])
def toggle_blinking():
    """Start/stop button."""
    _controller().toggle()

    return _status_response()


@main_bp.route("/api/rate", methods=["POST"])
def set_rate():
    """Select the blink rate used by the next start."""
    data = _json_body()
    if data is None:
        return _error("Expected a JSON object")

    validation = validate_rate(data.get("rate"))
    if not validation.is_valid:
        return _error(validation.error_message)

    _controller().rate = validation.value
    return _status_response()


@main_bp.route("/api/volume", methods=["POST"])
def set_volume():
    """Volume slider: applies to the playing cue and the next one."""
    data = _json_body()
    if data is None:
        return _error("Expected a JSON object")

    validation = validate_volume(data.get("volume"))
    if not validation.is_valid:
        return _error(validation.error_message)

    _controller().set_volume(validation.value)

    warnings = [validation.warning_message] if validation.has_warning else None
    return _status_response(warnings=warnings)
