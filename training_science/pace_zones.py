"""
Pace Zones: Planner-facing training paces per workout type.

Paces are computed from VDOT × 1.05 (the plan generator works from a
weighted VDOT that runs slightly conservative) and reported as the
average of each zone's fast and slow end, snapped to 5 seconds.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from .vdot import velocity_at_percentage


VDOT_ADJUSTMENT = 1.05

DEFAULT_VDOT = 45.0

VALID_VDOT_RANGE = (20.0, 85.0)


class PaceZone(Enum):
    """Training pace zones used when building weekly schedules."""
    RECOVERY = "recovery"
    EASY = "easy"
    TEMPO = "tempo"
    MARATHON = "marathon"
    THRESHOLD = "threshold"
    ANAEROBIC = "anaerobic"
    INTERVAL = "interval"

    @property
    def percentage_range(self) -> Tuple[float, float]:
        return PACE_ZONE_RANGES[self]

    @property
    def display_name(self) -> str:
        return PACE_ZONE_LABELS[self]


PACE_ZONE_RANGES: Dict[PaceZone, Tuple[float, float]] = {
    PaceZone.RECOVERY: (0.52, 0.59),
    PaceZone.EASY: (0.59, 0.74),
    PaceZone.TEMPO: (0.75, 0.84),
    PaceZone.MARATHON: (0.78, 0.82),
    PaceZone.THRESHOLD: (0.83, 0.88),
    PaceZone.ANAEROBIC: (0.88, 0.95),
    PaceZone.INTERVAL: (0.95, 1.0),
}

PACE_ZONE_LABELS: Dict[PaceZone, str] = {
    PaceZone.RECOVERY: "Recovery pace [R]",
    PaceZone.EASY: "Easy pace [Easy]",
    PaceZone.TEMPO: "Tempo pace [T]",
    PaceZone.MARATHON: "Marathon pace [M]",
    PaceZone.THRESHOLD: "Threshold pace [TH]",
    PaceZone.ANAEROBIC: "Anaerobic pace [AN]",
    PaceZone.INTERVAL: "Interval pace [I]",
}

# Workout type aliases → zone
TRAINING_TYPE_ZONES: Dict[str, PaceZone] = {
    'recovery_run': PaceZone.RECOVERY,
    'recovery': PaceZone.RECOVERY,
    'easy': PaceZone.EASY,
    'easyrun': PaceZone.EASY,
    'easy_run': PaceZone.EASY,
    'lsd': PaceZone.EASY,
    'tempo': PaceZone.TEMPO,
    'tempo_run': PaceZone.TEMPO,
    'threshold': PaceZone.THRESHOLD,
    'threshold_run': PaceZone.THRESHOLD,
    'marathon': PaceZone.MARATHON,
    'marathon_pace': PaceZone.MARATHON,
    'interval': PaceZone.INTERVAL,
    'intervals': PaceZone.INTERVAL,
    'interval_run': PaceZone.INTERVAL,
    # Long runs are prescribed around marathon pace
    'longrun': PaceZone.MARATHON,
    'long_run': PaceZone.MARATHON,
    # Mixed-intensity runs use tempo as the reference
    'progression': PaceZone.TEMPO,
    'combination': PaceZone.TEMPO,
}


def format_zone_pace(minutes: float) -> str:
    """
    Format a pace in minutes/km as m:ss, snapped to 5 seconds.

    Seconds are truncated first, then remainders 0-2 round down and
    3-4 round up (carrying into the minute).
    """
    total_seconds = int(minutes * 60)
    mins, secs = divmod(total_seconds, 60)

    if secs % 5 < 3:
        secs = (secs // 5) * 5
    else:
        secs = (secs // 5 + 1) * 5
        if secs >= 60:
            secs = 0
            mins += 1

    return f"{mins}:{secs:02d}"


def _zone_paces(zone: PaceZone, vdot: float) -> Tuple[float, float]:
    """(slow, fast) pace in minutes/km for a zone at an unadjusted VDOT."""
    adjusted_vdot = vdot * VDOT_ADJUSTMENT
    pct_low, pct_high = zone.percentage_range

    pace_low = 1000.0 / velocity_at_percentage(adjusted_vdot, pct_low)
    pace_high = 1000.0 / velocity_at_percentage(adjusted_vdot, pct_high)

    return pace_low, pace_high


def calculate_training_paces(vdot: float) -> Dict[PaceZone, str]:
    """
    Average pace of every zone.

    Args:
        vdot: Athlete VDOT (unadjusted)

    Returns:
        {zone: "m:ss"} per km
    """
    result = {}
    for zone in PaceZone:
        pace_low, pace_high = _zone_paces(zone, vdot)
        result[zone] = format_zone_pace((pace_low + pace_high) / 2.0)
    return result


def map_training_type_to_zone(training_type: str) -> Optional[PaceZone]:
    """Map a workout type name to its pace zone (None if unknown)."""
    return TRAINING_TYPE_ZONES.get(training_type.lower())


def get_suggested_pace(training_type: str, vdot: float) -> Optional[str]:
    """Average zone pace for a workout type."""
    zone = map_training_type_to_zone(training_type)
    if zone is None:
        return None
    return calculate_training_paces(vdot)[zone]


def get_pace_range(training_type: str, vdot: float) -> Optional[Tuple[str, str]]:
    """
    Pace range for a workout type.

    Returns:
        (fastest, slowest) as "m:ss", or None for unknown types
    """
    zone = map_training_type_to_zone(training_type)
    if zone is None:
        return None

    pace_low, pace_high = _zone_paces(zone, vdot)
    return format_zone_pace(pace_high), format_zone_pace(pace_low)


def generate_pace_table_text(vdot: float) -> str:
    """Plain-text pace table, one zone per line."""
    paces = calculate_training_paces(vdot)
    adjusted_vdot = vdot * VDOT_ADJUSTMENT

    lines = [
        f"***** Reference paces (VDOT: {vdot:.1f} x {VDOT_ADJUSTMENT} = {adjusted_vdot:.1f}) *****",
        "",
    ]
    for zone in PaceZone:
        lines.append(f"{zone.display_name}: {paces[zone]}")

    return "\n".join(lines) + "\n"


def is_valid_vdot(vdot: float) -> bool:
    """Whether a VDOT lies in the plausible 20-85 range."""
    low, high = VALID_VDOT_RANGE
    return low <= vdot <= high
