"""
Training science engine for running plans.

This package provides:
- Training load (TRIMP, Banister fitness/fatigue model)
- Aerobic capacity (VDOT, race predictions, training paces)
- Improvement modelling (difficulty index, VDOT progression)
- Periodization (start-stage recommendation, phase allocation)
"""

# Heart-rate metrics
from .metrics import (
    InvalidHeartRateRange,
    calculate_trimp,
    calculate_hrr_ratio,
)

# Banister model
from .banister import (
    BanisterParams,
    BanisterModel,
    LoadState,
    apply_update,
    performance_of,
    project_performance,
)

# VDOT
from .vdot import (
    VDOTZone,
    RACE_DISTANCES,
    calculate_vdot,
    bisect,
    paces,
    race_paces,
    predict_race_times,
    training_paces,
    calculate_difficulty_index,
    calculate_proposed_vdot,
    calculate_weekly_vdot,
    calculate_progressive_vdot,
    calculate_dynamic_vdot,
    calculate_dynamic_vdot_from_pace,
    format_pace,
    parse_pace,
)

# Planner-facing pace zones
from .pace_zones import (
    PaceZone,
    DEFAULT_VDOT,
    calculate_training_paces,
    get_pace_range,
    get_suggested_pace,
    map_training_type_to_zone,
    generate_pace_table_text,
    is_valid_vdot,
)

# Periodization
from .periodization import (
    TrainingStagePhase,
    TrainingRiskLevel,
    TrainingDistribution,
    StageAlternative,
    StageRecommendation,
    is_stage_available,
    get_standard_training_weeks,
    calculate_training_periods,
    recommend_start_stage,
)

# Performance series
from .performance_series import (
    TrainingSession,
    build_performance_series,
)

__all__ = [
    # Metrics
    'InvalidHeartRateRange',
    'calculate_trimp',
    'calculate_hrr_ratio',
    # Banister
    'BanisterParams',
    'BanisterModel',
    'LoadState',
    'apply_update',
    'performance_of',
    'project_performance',
    # VDOT
    'VDOTZone',
    'RACE_DISTANCES',
    'calculate_vdot',
    'bisect',
    'paces',
    'race_paces',
    'predict_race_times',
    'training_paces',
    'calculate_difficulty_index',
    'calculate_proposed_vdot',
    'calculate_weekly_vdot',
    'calculate_progressive_vdot',
    'calculate_dynamic_vdot',
    'calculate_dynamic_vdot_from_pace',
    'format_pace',
    'parse_pace',
    # Pace zones
    'PaceZone',
    'DEFAULT_VDOT',
    'calculate_training_paces',
    'get_pace_range',
    'get_suggested_pace',
    'map_training_type_to_zone',
    'generate_pace_table_text',
    'is_valid_vdot',
    # Periodization
    'TrainingStagePhase',
    'TrainingRiskLevel',
    'TrainingDistribution',
    'StageAlternative',
    'StageRecommendation',
    'is_stage_available',
    'get_standard_training_weeks',
    'calculate_training_periods',
    'recommend_start_stage',
    # Series
    'TrainingSession',
    'build_performance_series',
]
