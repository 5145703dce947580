"""Synthetic data generation and validation utilities.

This package produces the deterministic subscription dataset the dashboard
runs on, plus sanity checks that the generated data is well formed.
"""

from .dataset import SubscriptionDataset, get_default_dataset, reset_default_dataset
from .generator import (
    DEFAULT_GENERATOR_CONFIG,
    GeneratorConfig,
    apply_spikes,
    generate_daily_metrics,
    generate_trend,
)
from .lcg import LinearCongruentialRandom
from .validation import (
    ValidationResult,
    check_growth_trend,
    check_one_record_per_group,
    check_temporal_coverage,
    check_trial_conversions_bounded,
)

__all__ = [
    "SubscriptionDataset",
    "get_default_dataset",
    "reset_default_dataset",
    "DEFAULT_GENERATOR_CONFIG",
    "GeneratorConfig",
    "LinearCongruentialRandom",
    "apply_spikes",
    "generate_daily_metrics",
    "generate_trend",
    "ValidationResult",
    "check_growth_trend",
    "check_one_record_per_group",
    "check_temporal_coverage",
    "check_trial_conversions_bounded",
]
