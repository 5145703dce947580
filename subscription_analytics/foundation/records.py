"""Value objects shared by the subscription analytics pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

ALL = "all"


class Platform(str, Enum):
    """Mobile store a subscription was purchased through."""

    IOS = "ios"
    ANDROID = "android"


class PlanType(str, Enum):
    """Billing cadence of a subscription plan."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


def selector_value(selector: Platform | PlanType | str) -> str:
    """Plain string form of a platform or plan selector, including ``all``."""
    if isinstance(selector, Enum):
        return selector.value
    return str(selector)


_COUNT_FIELDS = (
    "active_subscriptions",
    "new_subscriptions",
    "churns",
    "mrr",
    "trial_conversions",
    "trial_starts",
)


@dataclass(frozen=True)
class DailyMetrics:
    """Subscription metrics for one (date, platform, plan) triple.

    Attributes
    ----------
    date:
        Calendar day the metrics describe
    active_subscriptions:
        Subscriptions active at the end of the day
    new_subscriptions:
        Subscriptions started during the day
    churns:
        Subscriptions cancelled during the day
    mrr:
        Monthly recurring revenue of the active subscriptions (whole yen)
    trial_conversions:
        Trials that converted to a paid plan during the day
    trial_starts:
        Trials started during the day
    platform:
        Store the subscriptions belong to
    plan_type:
        Billing cadence of the subscriptions
    """

    date: date
    active_subscriptions: int
    new_subscriptions: int
    churns: int
    mrr: int
    trial_conversions: int
    trial_starts: int
    platform: Platform
    plan_type: PlanType

    def __post_init__(self) -> None:
        """Validate counts and categorical dimensions."""
        for name in _COUNT_FIELDS:
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} cannot be negative: {value}")
        # Coerce plain strings ("ios", "yearly") to their enum members
        try:
            object.__setattr__(self, "platform", Platform(self.platform))
        except ValueError:
            raise ValueError(f"Unknown platform: {self.platform!r}") from None
        try:
            object.__setattr__(self, "plan_type", PlanType(self.plan_type))
        except ValueError:
            raise ValueError(f"Unknown plan type: {self.plan_type!r}") from None

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable representation of the record."""
        return {
            "date": self.date.isoformat(),
            "platform": self.platform.value,
            "plan_type": self.plan_type.value,
            "active_subscriptions": self.active_subscriptions,
            "new_subscriptions": self.new_subscriptions,
            "churns": self.churns,
            "mrr": self.mrr,
            "trial_conversions": self.trial_conversions,
            "trial_starts": self.trial_starts,
        }


@dataclass(frozen=True)
class Filters:
    """Query over the daily metrics.

    ``start_date`` and ``end_date`` are both inclusive. ``platform`` and
    ``plan_type`` accept a concrete value or ``"all"`` for no restriction.
    Ordering of the bounds is not validated; an inverted window simply
    matches nothing.
    """

    start_date: date
    end_date: date
    platform: Platform | str = ALL
    plan_type: PlanType | str = ALL

    def with_window(self, start_date: date, end_date: date) -> Filters:
        """Return a copy of the filters covering another date window."""
        return Filters(
            start_date=start_date,
            end_date=end_date,
            platform=self.platform,
            plan_type=self.plan_type,
        )


@dataclass(frozen=True)
class ChartDataPoint:
    """All records of one calendar date collapsed across platform and plan."""

    date: date
    active_subscriptions: int
    new_subscriptions: int
    churns: int
    mrr: int
    trial_conversion_rate: int

    def as_dict(self) -> dict[str, object]:
        return {
            "date": self.date.isoformat(),
            "active_subscriptions": self.active_subscriptions,
            "new_subscriptions": self.new_subscriptions,
            "churns": self.churns,
            "mrr": self.mrr,
            "trial_conversion_rate": self.trial_conversion_rate,
        }


@dataclass(frozen=True)
class DateRange:
    """Earliest and latest dates present in a dataset."""

    min: date
    max: date
