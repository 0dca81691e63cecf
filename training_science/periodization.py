"""
Periodization: Start-stage recommendation and week allocation.

Given the weeks left before a race, picks the training phase a plan
should start from, rates the risk of that choice, and splits the weeks
across phases:

    conversion → base → build → peak → taper

Conversion and taper are never valid starting points. The allocation
always sums to the number of weeks available.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Tuple
import math


FULL_MARATHON_THRESHOLD_KM = 21.1


class TrainingStagePhase(Enum):
    """Training phases in periodization order."""
    CONVERSION = "conversion"
    BASE = "base"
    BUILD = "build"
    PEAK = "peak"
    TAPER = "taper"

    @property
    def order(self) -> int:
        return list(TrainingStagePhase).index(self)

    @property
    def display_name(self) -> str:
        return STAGE_DISPLAY_NAMES[self]

    @property
    def api_identifier(self) -> str:
        return self.value


STAGE_DISPLAY_NAMES = {
    TrainingStagePhase.CONVERSION: "Conversion",
    TrainingStagePhase.BASE: "Base",
    TrainingStagePhase.BUILD: "Build",
    TrainingStagePhase.PEAK: "Peak",
    TrainingStagePhase.TAPER: "Taper",
}


class TrainingRiskLevel(Enum):
    """Risk of starting a plan from a given phase."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def color(self) -> str:
        return {
            TrainingRiskLevel.LOW: "green",
            TrainingRiskLevel.MEDIUM: "orange",
            TrainingRiskLevel.HIGH: "red",
        }[self]


@dataclass(frozen=True)
class TrainingDistribution:
    """Weeks allocated to each phase."""
    conversion_weeks: int = 0
    base_weeks: int = 0
    build_weeks: int = 0
    peak_weeks: int = 0
    taper_weeks: int = 0

    @property
    def total_weeks(self) -> int:
        return (
            self.conversion_weeks + self.base_weeks + self.build_weeks +
            self.peak_weeks + self.taper_weeks
        )

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class StageAlternative:
    """A non-recommended start phase the athlete may still choose."""
    stage: TrainingStagePhase
    suitable_for: str
    risk_level: TrainingRiskLevel
    description: str

    @property
    def id(self) -> str:
        return self.stage.value

    @property
    def stage_name(self) -> str:
        return self.stage.display_name

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'stage': self.stage.value,
            'stage_name': self.stage_name,
            'suitable_for': self.suitable_for,
            'risk_level': self.risk_level.value,
            'description': self.description,
        }


@dataclass(frozen=True)
class StageRecommendation:
    """Recommended start phase with risk, reasoning and alternatives."""
    recommended_stage: TrainingStagePhase
    reason: str
    risk_level: TrainingRiskLevel
    weeks_remaining: int
    training_distribution: TrainingDistribution
    is_full_marathon: bool
    alternatives: Tuple[StageAlternative, ...] = ()

    @property
    def stage_name(self) -> str:
        return self.recommended_stage.display_name

    @property
    def is_too_short(self) -> bool:
        """Less than 2 weeks: too little time for a training effect."""
        return self.weeks_remaining < 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            'recommended_stage': self.recommended_stage.value,
            'stage_name': self.stage_name,
            'reason': self.reason,
            'risk_level': self.risk_level.value,
            'weeks_remaining': self.weeks_remaining,
            'is_too_short': self.is_too_short,
            'is_full_marathon': self.is_full_marathon,
            'training_distribution': self.training_distribution.to_dict(),
            'alternatives': [alt.to_dict() for alt in self.alternatives],
        }


def is_stage_available(stage: TrainingStagePhase, weeks_remaining: int) -> bool:
    """
    Whether a plan can start from this phase.

    Peak is always available, build needs 3 weeks, base needs 6.
    """
    if stage == TrainingStagePhase.PEAK:
        return True
    if stage == TrainingStagePhase.BUILD:
        return weeks_remaining >= 3
    if stage == TrainingStagePhase.BASE:
        return weeks_remaining >= 6
    return False


def get_standard_training_weeks(distance_km: float) -> int:
    """
    Typical plan length for a race distance.

    Marathon 16-20 weeks, half 12-16, 10K 10-12, 5K 8-10.
    """
    if distance_km >= 42.0:
        return 18
    elif distance_km >= 21.0:
        return 14
    elif distance_km >= 10.0:
        return 11
    else:
        return 9


def calculate_taper_weeks(training_weeks: int, is_full_marathon: bool) -> int:
    """Taper shrinks for very short plans so training time remains."""
    if training_weeks <= 2:
        return 0
    if training_weeks == 3:
        return 1
    return 2 if is_full_marathon else 1


def calculate_training_periods(
    training_weeks: int,
    target_distance_km: float,
    start_from_stage: TrainingStagePhase = TrainingStagePhase.BASE
) -> TrainingDistribution:
    """
    Allocate weeks across phases.

    Allocation of the weeks left after taper:
        build: build = ceil(n/2), peak = rest
        peak:  all peak
        base:  n >= 10: 40% base, 30% build, rest peak
               6-9:     2 base, ceil((n-2)/2) build, rest peak
               3-5:     1 base, 1 build, rest peak
               1-2:     all base
        conversion/taper are not valid starts: all peak

    Args:
        training_weeks: Weeks until race day
        target_distance_km: Race distance
        start_from_stage: Phase the plan starts from

    Returns:
        TrainingDistribution summing to training_weeks
    """
    is_full_marathon = target_distance_km > FULL_MARATHON_THRESHOLD_KM

    taper_weeks = calculate_taper_weeks(training_weeks, is_full_marathon)
    remaining = max(0, training_weeks - taper_weeks)

    base_weeks = 0
    build_weeks = 0
    peak_weeks = 0

    if start_from_stage == TrainingStagePhase.BUILD:
        if remaining >= 2:
            build_weeks = math.ceil(remaining / 2)
            peak_weeks = remaining - build_weeks
        elif remaining == 1:
            build_weeks = 1

    elif start_from_stage == TrainingStagePhase.BASE:
        if remaining >= 10:
            base_weeks = int(remaining * 0.4)
            build_weeks = int(remaining * 0.3)
            peak_weeks = remaining - base_weeks - build_weeks
        elif remaining >= 6:
            base_weeks = 2
            build_weeks = math.ceil((remaining - 2) / 2)
            peak_weeks = remaining - base_weeks - build_weeks
        elif remaining >= 3:
            base_weeks = 1
            build_weeks = 1
            peak_weeks = remaining - 2
        else:
            # 1-2 weeks: unreasonable but keeps the total right
            base_weeks = remaining

    else:
        # Peak, plus the unsupported conversion/taper starts
        peak_weeks = remaining

    return TrainingDistribution(
        conversion_weeks=0,
        base_weeks=base_weeks,
        build_weeks=build_weeks,
        peak_weeks=peak_weeks,
        taper_weeks=taper_weeks,
    )


def _alternatives_for(
    recommended: TrainingStagePhase,
    weeks_remaining: int
) -> Tuple[StageAlternative, ...]:
    """Alternative start phases, only those available at weeks_remaining."""
    alternatives: List[StageAlternative] = []

    if weeks_remaining < 2:
        return ()

    if recommended == TrainingStagePhase.BUILD:
        alternatives.append(StageAlternative(
            stage=TrainingStagePhase.PEAK,
            suitable_for="Well-trained, experienced runners",
            risk_level=TrainingRiskLevel.MEDIUM,
            description="Suited to runners already covering 40 km+ per week",
        ))

        if is_stage_available(TrainingStagePhase.BASE, weeks_remaining):
            if weeks_remaining >= 10:
                base_risk = TrainingRiskLevel.LOW
                base_description = "Start from base and progress gradually"
            else:
                base_risk = TrainingRiskLevel.MEDIUM
                base_description = "Short on time; each phase may be less effective"

            alternatives.append(StageAlternative(
                stage=TrainingStagePhase.BASE,
                suitable_for="Complete plan",
                risk_level=base_risk,
                description=base_description,
            ))

    elif recommended == TrainingStagePhase.PEAK:
        if is_stage_available(TrainingStagePhase.BUILD, weeks_remaining):
            alternatives.append(StageAlternative(
                stage=TrainingStagePhase.BUILD,
                suitable_for="Runners with a regular training habit",
                risk_level=TrainingRiskLevel.LOW,
                description="A safer choice",
            ))

        if is_stage_available(TrainingStagePhase.BASE, weeks_remaining):
            alternatives.append(StageAlternative(
                stage=TrainingStagePhase.BASE,
                suitable_for="Complete plan",
                risk_level=TrainingRiskLevel.HIGH,
                description="Not enough time; each phase may be ineffective",
            ))

    elif recommended == TrainingStagePhase.BASE:
        alternatives.append(StageAlternative(
            stage=TrainingStagePhase.BUILD,
            suitable_for="Runners with a regular training habit",
            risk_level=TrainingRiskLevel.MEDIUM,
            description="If already running 20-30 km per week",
        ))

    return tuple(alternatives)


def recommend_start_stage(
    weeks_remaining: int,
    target_distance_km: float = 21.1
) -> StageRecommendation:
    """
    Recommend the phase a plan should start from.

        < 2 weeks:  peak, high risk (too short)
        2 weeks:    peak, medium risk
        3-11 weeks: build, low risk
        12+ weeks:  base, low risk

    Args:
        weeks_remaining: Weeks until race day
        target_distance_km: Race distance

    Returns:
        StageRecommendation with distribution and alternatives
    """
    if weeks_remaining < 2:
        stage = TrainingStagePhase.PEAK
        risk = TrainingRiskLevel.HIGH
        reason = "Less than 2 weeks until race day; too short for a training effect"
    elif weeks_remaining == 2:
        stage = TrainingStagePhase.PEAK
        risk = TrainingRiskLevel.MEDIUM
        reason = (
            f"{weeks_remaining} weeks left; suited to runners with an "
            f"established training base"
        )
    elif weeks_remaining < 12:
        stage = TrainingStagePhase.BUILD
        risk = TrainingRiskLevel.LOW
        reason = (
            f"{weeks_remaining} weeks left; suited to runners with a regular "
            f"training habit, skipping base"
        )
    else:
        stage = TrainingStagePhase.BASE
        risk = TrainingRiskLevel.LOW
        reason = f"{weeks_remaining} weeks left; enough time for a complete plan"

    distribution = calculate_training_periods(weeks_remaining, target_distance_km, stage)

    return StageRecommendation(
        recommended_stage=stage,
        reason=reason,
        risk_level=risk,
        weeks_remaining=weeks_remaining,
        training_distribution=distribution,
        is_full_marathon=target_distance_km > FULL_MARATHON_THRESHOLD_KM,
        alternatives=_alternatives_for(stage, weeks_remaining),
    )
