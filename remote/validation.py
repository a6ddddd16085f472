"""Validation for remote control requests."""

from dataclasses import dataclass
from typing import Any, Optional

from blink.config import BLINK_RATES, VOLUME_MAX, VOLUME_MIN, snap_volume


@dataclass
class ValidationResult:
    """Result of a validation check."""
    is_valid: bool
    has_warning: bool
    value: Any = None
    error_message: Optional[str] = None
    warning_message: Optional[str] = None


def validate_rate(rate) -> ValidationResult:
    """
    Validate blink rate.
    Must be one of the picker values (15 or 20 per minute)
    """
    try:
        rate_int = int(rate)
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False,
            has_warning=False,
            error_message=f"Blink rate must be a number, got {rate!r}"
        )

    if rate_int != rate and str(rate_int) != str(rate):
        return ValidationResult(
            is_valid=False,
            has_warning=False,
            error_message=f"Blink rate must be a whole number, got {rate!r}"
        )

    if rate_int not in BLINK_RATES:
        return ValidationResult(
            is_valid=False,
            has_warning=False,
            error_message=f"Blink rate must be one of {', '.join(map(str, BLINK_RATES))}"
        )

    return ValidationResult(is_valid=True, has_warning=False, value=rate_int)


def validate_volume(volume) -> ValidationResult:
    """
    Validate volume.
    Hard limits: 0.0-1.0
    Warning: value between slider steps (snapped to nearest 0.1)
    """
    try:
        volume_float = float(volume)
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False,
            has_warning=False,
            error_message=f"Volume must be a number, got {volume!r}"
        )

    if not VOLUME_MIN <= volume_float <= VOLUME_MAX:
        return ValidationResult(
            is_valid=False,
            has_warning=False,
            error_message=f"Volume must be between {VOLUME_MIN} and {VOLUME_MAX}"
        )

    snapped = snap_volume(volume_float)
    if abs(snapped - volume_float) > 1e-9:
        return ValidationResult(
            is_valid=True,
            has_warning=True,
            value=snapped,
            warning_message=f"Volume {volume_float} snapped to {snapped}"
        )

    return ValidationResult(is_valid=True, has_warning=False, value=snapped)
