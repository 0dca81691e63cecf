"""
Daily performance curve from a window of recorded workouts.

Walks day by day from the first usable workout to an end date, feeding
the Banister model one update per day, and blends in HRV where a
training day has it.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional
import numpy as np
import pandas as pd

from .banister import BanisterModel, BanisterParams


# Sessions need enough HR samples for a trustworthy average
MIN_HR_SAMPLES = 50
MIN_AVG_HR = 50.0

# HRV normalisation window (ms) and weight in the blended score
HRV_RANGE = (20.0, 100.0)
HRV_WEIGHT = 0.2

SERIES_COLUMNS = [
    'date', 'performance', 'fitness', 'fatigue',
    'trimp', 'has_workout', 'workout_name',
]


@dataclass
class TrainingSession:
    """One recorded workout."""
    start: datetime
    duration_sec: float
    avg_hr: float
    hr_sample_count: int
    workout_name: Optional[str] = None

    @property
    def day(self) -> date:
        return self.start.date()

    def is_usable(self) -> bool:
        """Enough HR samples and a plausible average HR."""
        return self.hr_sample_count >= MIN_HR_SAMPLES and self.avg_hr > MIN_AVG_HR


def blend_hrv(performance: float, hrv: float) -> float:
    """Mix normalised HRV (scaled to 0-100) into a performance value."""
    low, high = HRV_RANGE
    normalized = float(np.clip((hrv - low) / (high - low), 0.0, 1.0))
    return performance * (1 - HRV_WEIGHT) + normalized * 100 * HRV_WEIGHT


def build_performance_series(
    sessions: Iterable[TrainingSession],
    end_date: date,
    resting_hr: float,
    max_hr: float,
    hrv_by_date: Optional[Dict[date, float]] = None,
    params: Optional[BanisterParams] = None,
    verbose: bool = False
) -> pd.DataFrame:
    """
    Build a daily performance series.

    Args:
        sessions: Recorded workouts, any order
        end_date: Last day of the series (inclusive)
        resting_hr: Athlete resting HR (bpm)
        max_hr: Athlete max HR (bpm)
        hrv_by_date: Average HRV per day, optional
        params: Banister constants
        verbose: Print excluded sessions and daily points

    Returns:
        DataFrame with one row per day from the first usable workout
        to end_date; empty (with the same columns) if none is usable
    """
    hrv_by_date = hrv_by_date or {}
    model = BanisterModel(params)

    valid: List[TrainingSession] = []
    for session in sessions:
        if not session.is_usable():
            if verbose:
                print(f"Excluded session {session.start}: "
                      f"{session.hr_sample_count} HR samples, avg HR {session.avg_hr:.0f}")
            continue
        valid.append(session)

    if not valid:
        return pd.DataFrame(columns=SERIES_COLUMNS)

    valid.sort(key=lambda s: s.start)

    daily_trimp: Dict[date, float] = {}
    daily_name: Dict[date, Optional[str]] = {}
    for session in valid:
        trimp = model.calculate_trimp(session.duration_sec, session.avg_hr, resting_hr, max_hr)
        daily_trimp[session.day] = daily_trimp.get(session.day, 0.0) + trimp
        daily_name.setdefault(session.day, session.workout_name)

    rows = []
    current = valid[0].day
    while current <= end_date:
        if current in daily_trimp:
            trimp = daily_trimp[current]
            model.update(current, trimp)
            performance = model.performance()

            hrv = hrv_by_date.get(current, 0.0)
            if hrv > 0:
                performance = blend_hrv(performance, hrv)

            has_workout = True
        else:
            trimp = 0.0
            model.update(current)
            performance = model.performance()
            has_workout = False

        rows.append({
            'date': current,
            'performance': performance,
            'fitness': model.fitness,
            'fatigue': model.fatigue,
            'trimp': trimp,
            'has_workout': has_workout,
            'workout_name': daily_name.get(current),
        })

        if verbose:
            print(f"{current}: performance {performance:.2f}, TRIMP {trimp:.1f}")

        current += timedelta(days=1)

    return pd.DataFrame(rows, columns=SERIES_COLUMNS)
