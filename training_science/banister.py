"""
Banister impulse-response model: fitness/fatigue accumulators.

Performance(t) = baseline + k1 × fitness(t) - k2 × fatigue(t)

Both accumulators receive every training impulse and decay exponentially
with their own time constant (42 days fitness, 10 days fatigue).

Based on:
- Banister et al. (1975): A systems model of training for athletic performance
- Morton et al. (1990): Modeling human performance in running
"""

from dataclasses import dataclass, asdict, fields, replace
from datetime import date, datetime
from typing import Optional, Dict, Any, Tuple, Union
import math

from .metrics import calculate_trimp


DateLike = Union[date, datetime]


@dataclass
class BanisterParams:
    """
    Tunable constants of the impulse-response model.
    """
    baseline: float = 100.0     # Performance with no training history
    tau_fitness: float = 42.0   # Fitness decay time constant (days)
    tau_fatigue: float = 10.0   # Fatigue decay time constant (days)
    k1: float = 1.0             # Fitness weight
    k2: float = 2.0             # Fatigue weight

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'BanisterParams':
        """Create parameters from dictionary. Unknown keys raise ValueError."""
        unknown = set(d) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unknown Banister parameters: {sorted(unknown)}")
        return cls(**d)

    def validate(self) -> Tuple[bool, str]:
        """Validate parameter constraints."""
        issues = []

        if self.tau_fitness <= 0 or self.tau_fatigue <= 0:
            issues.append("Time constants must be positive")
        if self.k1 < 0 or self.k2 < 0:
            issues.append("Weights must be non-negative")

        if issues:
            return False, "; ".join(issues)
        return True, "Valid"


DEFAULT_PARAMS = BanisterParams()


@dataclass
class LoadState:
    """
    Accumulator state for one athlete.

    Owned by the caller; the engine never keeps a shared copy.
    """
    fitness: float = 0.0
    fatigue: float = 0.0
    last_update_date: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self.last_update_date is None


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def calendar_days_between(start: DateLike, end: DateLike) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (_to_date(end) - _to_date(start)).days


def performance_of(state: LoadState, params: Optional[BanisterParams] = None) -> float:
    """Predicted performance from the current accumulators."""
    params = params or DEFAULT_PARAMS
    return params.baseline + params.k1 * state.fitness - params.k2 * state.fatigue


def apply_update(
    state: LoadState,
    on_date: DateLike,
    trimp: float = 0.0,
    params: Optional[BanisterParams] = None
) -> LoadState:
    """
    Advance the model to a date, optionally adding a training impulse.

    Rules:
        - First update: fitness = fatigue = trimp
        - Later date, trimp > 0: decay both, add trimp, move date forward
        - Later date, trimp == 0: decay both, date is NOT moved forward
        - Same date, trimp > 0: add trimp without decay
        - Same date, trimp == 0: nothing changes

    A rest-day update leaves last_update_date where it was, so the next
    call decays the same days again. Callers feeding one update per
    calendar day get a compounding decay on rest streaks.

    Args:
        state: Current accumulator state (not modified)
        on_date: Date of the update
        trimp: Training impulse for the session, 0 for a rest day
        params: Model constants

    Returns:
        New LoadState
    """
    params = params or DEFAULT_PARAMS
    day = _to_date(on_date)

    if state.last_update_date is None:
        return LoadState(fitness=trimp, fatigue=trimp, last_update_date=day)

    days = calendar_days_between(state.last_update_date, day)

    if days > 0:
        fitness = state.fitness * math.exp(-days / params.tau_fitness)
        fatigue = state.fatigue * math.exp(-days / params.tau_fatigue)

        if trimp > 0:
            return LoadState(fitness + trimp, fatigue + trimp, day)
        return LoadState(fitness, fatigue, state.last_update_date)

    if trimp > 0:
        # Additional session on the same day
        return LoadState(state.fitness + trimp, state.fatigue + trimp, day)

    return replace(state)


def project_performance(
    state: LoadState,
    on_date: DateLike,
    params: Optional[BanisterParams] = None
) -> float:
    """
    Project performance forward to a date without touching the state.

    Returns the baseline when the state has never been updated.
    """
    params = params or DEFAULT_PARAMS

    if state.last_update_date is None:
        return params.baseline

    days = calendar_days_between(state.last_update_date, on_date)
    fitness = state.fitness * math.exp(-days / params.tau_fitness)
    fatigue = state.fatigue * math.exp(-days / params.tau_fatigue)

    return params.baseline + params.k1 * fitness - params.k2 * fatigue


class BanisterModel:
    """
    Load simulator holding one athlete's accumulators.

    Instances are single-writer: concurrent updates must be serialized
    by the caller.
    """

    def __init__(
        self,
        params: Optional[BanisterParams] = None,
        state: Optional[LoadState] = None
    ):
        self.params = params or BanisterParams()
        self._state = state if state is not None else LoadState()

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def fitness(self) -> float:
        return self._state.fitness

    @property
    def fatigue(self) -> float:
        return self._state.fatigue

    @property
    def last_update_date(self) -> Optional[date]:
        return self._state.last_update_date

    @staticmethod
    def calculate_trimp(
        duration_sec: float,
        avg_hr: float,
        resting_hr: float,
        max_hr: float
    ) -> float:
        return calculate_trimp(duration_sec, avg_hr, resting_hr, max_hr)

    def update(self, on_date: DateLike, trimp: float = 0.0) -> None:
        self._state = apply_update(self._state, on_date, trimp, self.params)

    def performance(self) -> float:
        return performance_of(self._state, self.params)

    def get_performance_for_date(self, on_date: DateLike) -> float:
        return project_performance(self._state, on_date, self.params)

    def reset(self) -> None:
        self._state = LoadState()
