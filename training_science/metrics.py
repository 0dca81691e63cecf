"""
Heart-rate based training metrics: TRIMP and heart rate reserve.

Based on:
- Banister (1991): TRIMP formula
- Karvonen (1957): Heart rate reserve
"""

import math


class InvalidHeartRateRange(ValueError):
    """Raised when max HR does not exceed resting HR."""


def validate_hr_range(max_hr: float, resting_hr: float) -> None:
    """
    Ensure a heart rate range can be used as a divisor.

    Raises:
        InvalidHeartRateRange: if max_hr <= resting_hr
    """
    if max_hr <= resting_hr:
        raise InvalidHeartRateRange(
            f"max_hr ({max_hr}) must be greater than resting_hr ({resting_hr})"
        )


def calculate_hrr_ratio(hr: float, max_hr: float, resting_hr: float) -> float:
    """
    Calculate heart rate reserve ratio.

    HR is clamped into [resting_hr, max_hr] first, so the result is in [0, 1].

    Args:
        hr: Heart rate (bpm)
        max_hr: Maximum heart rate (bpm)
        resting_hr: Resting heart rate (bpm)

    Returns:
        (hr - resting) / (max - resting)
    """
    validate_hr_range(max_hr, resting_hr)

    clamped = min(max(hr, resting_hr), max_hr)
    return (clamped - resting_hr) / (max_hr - resting_hr)


def calculate_trimp(
    duration_sec: float,
    avg_hr: float,
    resting_hr: float,
    max_hr: float
) -> float:
    """
    Calculate Training Impulse (TRIMP) for a session.

    TRIMP = Duration(min) × ratio × 0.64·e^(1.92·ratio)

    The ratio is floored at 0, so an average HR below resting gives a
    zero impulse rather than a negative one. It is not capped at 1.

    Args:
        duration_sec: Session duration in seconds
        avg_hr: Average heart rate during session (bpm)
        resting_hr: Resting heart rate (bpm)
        max_hr: Maximum heart rate (bpm)

    Returns:
        TRIMP value (arbitrary units)
    """
    validate_hr_range(max_hr, resting_hr)

    hr_ratio = max(0.0, (avg_hr - resting_hr) / (max_hr - resting_hr))
    y_factor = 0.64 * math.exp(1.92 * hr_ratio)

    return (duration_sec / 60.0) * hr_ratio * y_factor
