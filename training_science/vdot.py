"""
VDOT Equations: Aerobic capacity from race performance.

Based on:
- Daniels, J. & Gilbert, J. (1979). Oxygen Power: Performance Tables
  for Distance Runners
- Daniels, J. (2014). Daniels' Running Formula, 3rd ed.

VDOT is the ratio of the VO2 cost of running a race velocity to the
fraction of VO2max sustainable for the race duration:

    VO2(v)  = -4.6 + 0.182258·v + 0.000104·v²          (v in m/min)
    %max(t) = 0.8 + 0.1894393·e^(-0.012778·t)
                  + 0.2989558·e^(-0.1932605·t)         (t in min)
    VDOT    = VO2(v) / %max(t)

Race times are recovered from a VDOT by bisection, training paces by
inverting the VO2 quadratic in closed form.
"""

from enum import Enum
from typing import Callable, Dict, Optional, Tuple
import math

from .metrics import calculate_hrr_ratio


BISECTION_TOLERANCE = 1e-5

# Race distances in metres, in display order
RACE_DISTANCES: Dict[str, float] = {
    '5K': 5000.0,
    '10K': 10000.0,
    'Half Marathon': 21097.5,
    'Marathon': 42195.0,
}

# Search window for race times (minutes)
RACE_TIME_BOUNDS = (1.0, 600.0)

# Progress window for proposed VDOT (VDOT points above current)
MAX_VDOT_PROGRESS = 50.0


class VDOTZone(Enum):
    """Daniels training intensity zones."""
    EASY = "Easy"
    MARATHON = "Marathon"
    THRESHOLD = "Threshold"
    INTERVAL = "Interval"
    REPETITION = "Repetition"

    @property
    def percentage_range(self) -> Tuple[float, float]:
        """(low, high) fraction of VDOT for this zone."""
        return VDOT_ZONE_RANGES[self]


VDOT_ZONE_RANGES: Dict[VDOTZone, Tuple[float, float]] = {
    VDOTZone.EASY: (0.59, 0.74),
    VDOTZone.MARATHON: (0.75, 0.84),
    VDOTZone.THRESHOLD: (0.83, 0.88),
    VDOTZone.INTERVAL: (0.95, 1.00),
    VDOTZone.REPETITION: (1.05, 1.20),
}


# =============================================================================
# Core formula
# =============================================================================

def calculate_vdot(distance_m: float, time_sec: float) -> float:
    """
    Calculate VDOT from a race performance.

    Args:
        distance_m: Race distance in metres
        time_sec: Finish time in seconds

    Returns:
        VDOT score
    """
    if time_sec <= 0:
        raise ValueError(f"time_sec must be positive, got {time_sec}")

    time_min = time_sec / 60.0
    velocity = distance_m / time_min

    vo2 = -4.6 + 0.182258 * velocity + 0.000104 * velocity ** 2
    pct_max = (
        0.8
        + 0.1894393 * math.exp(-0.012778 * time_min)
        + 0.2989558 * math.exp(-0.1932605 * time_min)
    )

    return vo2 / pct_max


def velocity_at_percentage(vdot: float, pct: float) -> float:
    """
    Velocity (m/min) whose VO2 cost equals pct × VDOT.

    Positive root of 0.000104·v² + 0.182258·v - 4.6 = vdot·pct.
    """
    return (-0.182258 + math.sqrt(0.033218 - 0.000416 * (-4.6 - vdot * pct))) / 0.000208


def bisect(
    func: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float = BISECTION_TOLERANCE,
    increasing: bool = False
) -> float:
    """
    Find a root of func on [lower, upper] by interval halving.

    The default rule keeps the half where func changes sign relative to
    func(low). With increasing=True the upper bound moves whenever
    func(mid) > 0, which assumes func is monotonically increasing.

    func must cross zero inside the bounds. This is not checked: a
    non-bracketing interval still converges (to one of the bounds) and
    the returned value is meaningless.

    Returns:
        Midpoint of the final interval
    """
    low, high = lower, upper

    while high - low > tolerance:
        mid = (low + high) / 2
        if increasing:
            if func(mid) > 0:
                high = mid
            else:
                low = mid
        elif func(mid) * func(low) < 0:
            high = mid
        else:
            low = mid

    return (low + high) / 2


# =============================================================================
# Formatting helpers
# =============================================================================

def format_pace(seconds: float) -> str:
    """Format seconds as m:ss, rounding half up to the nearest second."""
    total_seconds = int(math.floor(seconds + 0.5))
    minutes, remaining = divmod(total_seconds, 60)
    return f"{minutes}:{remaining:02d}"


def parse_pace(pace_str: str) -> Optional[int]:
    """
    Parse an "m:ss" pace string into seconds.

    Returns:
        Seconds, or None if the string is not a valid pace
    """
    if not isinstance(pace_str, str):
        return None

    parts = pace_str.strip().split(':')
    if len(parts) != 2:
        return None

    try:
        minutes, seconds = int(parts[0]), int(parts[1])
    except ValueError:
        return None

    if minutes < 0 or not 0 <= seconds < 60:
        return None

    return minutes * 60 + seconds


# =============================================================================
# Race predictions and training paces
# =============================================================================

def predict_race_time(vdot: float, distance_m: float) -> float:
    """Predicted finish time in minutes for a distance at a VDOT."""
    def residual(time_min: float) -> float:
        return calculate_vdot(distance_m, time_min * 60) - vdot

    lower, upper = RACE_TIME_BOUNDS
    return bisect(residual, lower, upper)


def predict_race_times(vdot: float) -> Dict[str, float]:
    """Predicted finish times (minutes) for the standard race distances."""
    return {
        name: predict_race_time(vdot, distance)
        for name, distance in RACE_DISTANCES.items()
    }


def paces(vdot: float) -> Dict[str, str]:
    """
    Equivalent race performances for a VDOT.

    Returns:
        {distance name: finish time as "m:ss"}; minutes are not wrapped
        into hours, so a marathon reads e.g. "210:05"
    """
    return {
        name: format_pace(time_min * 60)
        for name, time_min in predict_race_times(vdot).items()
    }


def race_paces(vdot: float) -> Dict[str, str]:
    """Per-km pace ("m:ss") of each predicted race."""
    return {
        name: format_pace(time_min * 60 / (RACE_DISTANCES[name] / 1000.0))
        for name, time_min in predict_race_times(vdot).items()
    }


def training_paces(vdot: float) -> Dict[str, str]:
    """
    Daniels training pace ranges per km.

    Returns:
        {zone name: "faster ~ slower"}
    """
    result = {}

    for zone in VDOTZone:
        pct_low, pct_high = zone.percentage_range

        slower_velocity = velocity_at_percentage(vdot, pct_low)
        faster_velocity = velocity_at_percentage(vdot, pct_high)

        slower_pace = format_pace(1000.0 / slower_velocity * 60)
        faster_pace = format_pace(1000.0 / faster_velocity * 60)

        result[zone.value] = f"{faster_pace} ~ {slower_pace}"

    return result


# =============================================================================
# Improvement modelling
# =============================================================================

def calculate_difficulty_index(vdot1: float, vdot2: float, week: int, age: int) -> float:
    """
    Perceived difficulty of improving from vdot1 to vdot2.

    DI = 100 × ((vdot2/40)^2.4 - (vdot1/40)^2.4) × week_factor × age_factor

    week_factor: 1.0 → 0.75 linearly over 12-24 weeks (more time is easier),
                 1.0 outside that range
    age_factor:  1.0 up to 40, then +0.05 per year

    Args:
        vdot1: Current VDOT
        vdot2: Target VDOT
        week: Weeks available for the improvement
        age: Athlete age in years

    Returns:
        Difficulty index (0 when vdot1 == vdot2)
    """
    difficulty = 100 * ((vdot2 / 40) ** 2.4 - (vdot1 / 40) ** 2.4)

    min_week, max_week = 12, 24
    week_factor = 1.0
    if min_week <= week <= max_week:
        week_factor = 1.0 - ((week - min_week) / min_week) * 0.25

    age_factor = 1.0
    if age > 40:
        age_factor = 1.0 + (age - 40) / 20.0

    return difficulty * week_factor * age_factor


def calculate_proposed_vdot(
    current_vdot: float,
    target_difficulty: float,
    week: int,
    age: int
) -> float:
    """
    Target VDOT reachable at a given difficulty.

    Solves calculate_difficulty_index(current, x, week, age) = target on
    [current, current + 50]. Targets beyond that window saturate at the
    upper bound; non-positive targets return current_vdot.
    """
    def residual(vdot2: float) -> float:
        return calculate_difficulty_index(current_vdot, vdot2, week, age) - target_difficulty

    return bisect(
        residual,
        current_vdot,
        current_vdot + MAX_VDOT_PROGRESS,
        increasing=True
    )


def calculate_weekly_vdot(
    current_vdot: float,
    target_vdot: float,
    current_week: int,
    total_weeks: int
) -> float:
    """
    Linear VDOT progression reaching the target two weeks before the end.

    Out-of-range weeks return current_vdot unchanged.
    """
    if not 0 < current_week <= total_weeks:
        return current_vdot

    target_week = total_weeks - 2
    if current_week >= target_week:
        return target_vdot

    weekly_increase = (target_vdot - current_vdot) / target_week
    return current_vdot + weekly_increase * current_week


def calculate_progressive_vdot(
    current_vdot: float,
    target_vdot: float,
    total_weeks: int,
    current_week: int
) -> float:
    """
    Linear VDOT progression between week 3 and total_weeks - 4.

    Holds current_vdot before the window and target_vdot after it.
    Plans of 7 weeks or less, and out-of-range weeks, return
    current_vdot unchanged.
    """
    if total_weeks <= 7 or not 0 < current_week <= total_weeks:
        return current_vdot

    start_week = 3
    end_week = total_weeks - 4

    if current_week < start_week:
        return current_vdot
    if current_week > end_week:
        return target_vdot

    progress_weeks = end_week - start_week + 1
    current_progress_week = current_week - start_week + 1
    progress_ratio = current_progress_week / progress_weeks

    return current_vdot + (target_vdot - current_vdot) * progress_ratio


# =============================================================================
# Heart-rate adjusted VDOT
# =============================================================================

def calculate_dynamic_vdot(
    distance_km: float,
    time_sec: float,
    hr: float,
    max_hr: float = 180,
    resting_hr: float = 60,
    a: float = 33.0,
    b: float = 1.2
) -> float:
    """
    VDOT adjusted for the effort a performance cost.

    dynamic = VDOT + a × (1 - HRR)^b

    A run finished at a low fraction of heart rate reserve implies more
    capacity than the raw race formula shows.

    Raises:
        InvalidHeartRateRange: if max_hr <= resting_hr
    """
    base_vdot = calculate_vdot(distance_km * 1000, time_sec)
    hrr = calculate_hrr_ratio(hr, max_hr, resting_hr)

    return base_vdot + a * (1 - hrr) ** b


def calculate_dynamic_vdot_from_pace(
    distance_km: float,
    pace_str: str,
    hr: float,
    max_hr: float = 180,
    resting_hr: float = 60
) -> float:
    """
    Dynamic VDOT from an average pace string ("m:ss" per km).

    Returns:
        Dynamic VDOT, or 0.0 if the pace cannot be parsed or the run
        has no duration
    """
    pace_sec = parse_pace(pace_str)
    if not pace_sec or distance_km <= 0:
        return 0.0

    total_time = pace_sec * distance_km
    return calculate_dynamic_vdot(distance_km, total_time, hr, max_hr, resting_hr)
