from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
import logging
import math
from typing import List, Sequence

from subscription_analytics.foundation._utils import round_half_up
from subscription_analytics.foundation.records import DailyMetrics, Platform, PlanType

from .lcg import LinearCongruentialRandom

logger = logging.getLogger(__name__)

PLATFORM_MULTIPLIERS = {Platform.IOS: 1.4, Platform.ANDROID: 1.0}
PLAN_MULTIPLIERS = {PlanType.MONTHLY: 1.0, PlanType.YEARLY: 0.35}

# Monthly list price per platform; yearly plans are billed at the annual
# price and contribute a twelfth of it to MRR.
MONTHLY_PRICES = {Platform.IOS: 980, Platform.ANDROID: 880}
YEARLY_PRICES = {Platform.IOS: 9800, Platform.ANDROID: 8800}

CAMPAIGN_INTERVAL_DAYS = 45
CAMPAIGN_LENGTH_DAYS = 3
MAX_CONVERSION_RATE = 0.55


@dataclass(frozen=True)
class MetricModel:
    """Trend parameters of one generated metric.

    Attributes
    ----------
    base: Value on day zero before platform/plan multipliers.
    growth: Annual growth rate (negative for a declining metric).
    jitter_low: Lower bound of the multiplicative noise factor.
    jitter_width: Width of the noise factor interval.
    """

    base: float
    growth: float
    jitter_low: float
    jitter_width: float


ACTIVE_MODEL = MetricModel(base=8000, growth=0.25, jitter_low=0.95, jitter_width=0.1)
NEW_MODEL = MetricModel(base=120, growth=0.2, jitter_low=0.8, jitter_width=0.4)
CHURN_MODEL = MetricModel(base=45, growth=-0.1, jitter_low=0.7, jitter_width=0.6)
TRIAL_MODEL = MetricModel(base=80, growth=0.15, jitter_low=0.8, jitter_width=0.4)


@dataclass(frozen=True)
class GeneratorConfig:
    """Configuration of the synthetic dataset.

    Attributes
    ----------
    seed: Initial state of the linear congruential stream.
    start_date: First calendar day of the dataset.
    days: Number of consecutive days to generate.
    platforms: Platforms generated for every day, in draw order.
    plan_types: Plans generated for every platform, in draw order.
    """

    seed: int = 42
    start_date: date = date(2024, 1, 1)
    days: int = 400
    platforms: Sequence[Platform] = (Platform.IOS, Platform.ANDROID)
    plan_types: Sequence[PlanType] = (PlanType.MONTHLY, PlanType.YEARLY)

    def __post_init__(self) -> None:
        if self.days <= 0:
            raise ValueError(f"days must be positive: {self.days}")
        if not self.platforms:
            raise ValueError("at least one platform is required")
        if not self.plan_types:
            raise ValueError("at least one plan type is required")
        object.__setattr__(
            self, "platforms", tuple(Platform(p) for p in self.platforms)
        )
        object.__setattr__(
            self, "plan_types", tuple(PlanType(p) for p in self.plan_types)
        )

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=self.days - 1)


DEFAULT_GENERATOR_CONFIG = GeneratorConfig()


def generate_trend(day_index: int, base_value: float, growth_rate: float) -> float:
    """Compound growth plus yearly seasonality and a weekly wave."""
    trend = base_value * math.pow(1 + growth_rate / 365, day_index)
    seasonality = math.sin(day_index / 365 * 2 * math.pi) * base_value * 0.1
    weekly_pattern = math.sin(day_index / 7 * 2 * math.pi) * base_value * 0.05
    return trend + seasonality + weekly_pattern


def apply_spikes(value: float, rng: LinearCongruentialRandom, day_index: int) -> float:
    """Inject campaign and random spikes.

    During the first three days of every 45-day cycle a draw above 0.5
    multiplies the value by [1.3, 1.7). Otherwise a second draw above 0.92
    multiplies it by [1.15, 1.35). Outside the campaign window only the
    second draw happens.
    """
    if day_index % CAMPAIGN_INTERVAL_DAYS < CAMPAIGN_LENGTH_DAYS and rng.random() > 0.5:
        return value * rng.spread(1.3, 0.4)
    if rng.random() > 0.92:
        return value * rng.spread(1.15, 0.2)
    return value


def _price_for(platform: Platform, plan_type: PlanType) -> float:
    if plan_type is PlanType.MONTHLY:
        return MONTHLY_PRICES[platform]
    return YEARLY_PRICES[platform] / 12


def _generate_group(
    rng: LinearCongruentialRandom,
    day: date,
    day_index: int,
    total_days: int,
    platform: Platform,
    plan_type: PlanType,
) -> DailyMetrics:
    # Draw order is part of the contract: active spikes, active jitter,
    # new spikes, new jitter, churn jitter, trial jitter, conversion jitter.
    multiplier = PLATFORM_MULTIPLIERS[platform] * PLAN_MULTIPLIERS[plan_type]

    active = generate_trend(
        day_index, ACTIVE_MODEL.base * multiplier, ACTIVE_MODEL.growth
    )
    active = apply_spikes(active, rng, day_index)
    active_subscriptions = round_half_up(
        active * rng.spread(ACTIVE_MODEL.jitter_low, ACTIVE_MODEL.jitter_width)
    )

    new = generate_trend(day_index, NEW_MODEL.base * multiplier, NEW_MODEL.growth)
    new = apply_spikes(new, rng, day_index)
    new_subscriptions = round_half_up(
        new * rng.spread(NEW_MODEL.jitter_low, NEW_MODEL.jitter_width)
    )

    churn = generate_trend(
        day_index, CHURN_MODEL.base * multiplier, CHURN_MODEL.growth
    )
    churns = max(
        0,
        round_half_up(
            churn * rng.spread(CHURN_MODEL.jitter_low, CHURN_MODEL.jitter_width)
        ),
    )

    mrr = round_half_up(active_subscriptions * _price_for(platform, plan_type))

    trials = generate_trend(
        day_index, TRIAL_MODEL.base * multiplier, TRIAL_MODEL.growth
    )
    trial_starts = round_half_up(
        trials * rng.spread(TRIAL_MODEL.jitter_low, TRIAL_MODEL.jitter_width)
    )

    # Conversion improves from 32% to 40% over the window before noise
    base_conversion_rate = 0.32 + (day_index / total_days) * 0.08
    conversion_rate = base_conversion_rate * rng.spread(0.85, 0.3)
    trial_conversions = round_half_up(
        trial_starts * min(MAX_CONVERSION_RATE, conversion_rate)
    )

    return DailyMetrics(
        date=day,
        active_subscriptions=active_subscriptions,
        new_subscriptions=new_subscriptions,
        churns=churns,
        mrr=mrr,
        trial_conversions=trial_conversions,
        trial_starts=trial_starts,
        platform=platform,
        plan_type=plan_type,
    )


def generate_daily_metrics(config: GeneratorConfig | None = None) -> List[DailyMetrics]:
    """Generate the synthetic subscription dataset.

    Records are ordered day-major, then platform, then plan, which is also
    the order the random stream is consumed in. The same configuration
    always yields the same records.

    Parameters
    ----------
    config:
        Generation settings. Defaults to ``DEFAULT_GENERATOR_CONFIG``
        (seed 42, 400 days from 2024-01-01, both platforms and plans).

    Returns
    -------
    list[DailyMetrics]
        ``days * len(platforms) * len(plan_types)`` records
    """
    config = config or DEFAULT_GENERATOR_CONFIG
    rng = LinearCongruentialRandom(config.seed)
    records: List[DailyMetrics] = []

    for day_index in range(config.days):
        day = config.start_date + timedelta(days=day_index)
        for platform in config.platforms:
            for plan_type in config.plan_types:
                records.append(
                    _generate_group(
                        rng, day, day_index, config.days, platform, plan_type
                    )
                )

    logger.debug(
        f"Generated {len(records)} records from {config.start_date} "
        f"to {config.end_date} using {rng.draws} draws (seed={config.seed})"
    )
    return records
