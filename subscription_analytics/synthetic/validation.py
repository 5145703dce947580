from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Sequence, Tuple

from subscription_analytics.foundation.records import DailyMetrics, Platform, PlanType


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    message: str = ""


def _group_key(record: DailyMetrics) -> Tuple[date, Platform, PlanType]:
    return (record.date, record.platform, record.plan_type)


def check_one_record_per_group(records: Sequence[DailyMetrics]) -> ValidationResult:
    if not records:
        return ValidationResult(True, "no records to validate")

    counts = Counter(_group_key(r) for r in records)
    duplicates = [key for key, count in counts.items() if count > 1]
    if duplicates:
        day, platform, plan = duplicates[0]
        return ValidationResult(
            False,
            f"{len(duplicates)} duplicate groups, first: {day} {platform.value} {plan.value}",
        )

    days = {r.date for r in records}
    platforms = {r.platform for r in records}
    plans = {r.plan_type for r in records}
    expected = len(days) * len(platforms) * len(plans)
    if len(counts) != expected:
        return ValidationResult(
            False, f"missing groups: found {len(counts)}, expected {expected}"
        )
    return ValidationResult(True, f"{len(counts)} unique groups")


def check_trial_conversions_bounded(
    records: Sequence[DailyMetrics], *, max_rate: float = 0.55
) -> ValidationResult:
    """Conversions never exceed ``max_rate`` of starts (plus rounding)."""
    for idx, r in enumerate(records):
        if r.trial_conversions > r.trial_starts:
            return ValidationResult(
                False, f"conversions exceed starts at index {idx}"
            )
        # round() can add at most half a conversion above the cap
        if r.trial_conversions > r.trial_starts * max_rate + 0.5:
            return ValidationResult(
                False,
                f"conversion rate above {max_rate:.0%} at index {idx}: "
                f"{r.trial_conversions}/{r.trial_starts}",
            )
    return ValidationResult(True, "trial conversions within bounds")


def check_temporal_coverage(
    records: Sequence[DailyMetrics], start: date, end: date
) -> ValidationResult:
    """Every calendar day between ``start`` and ``end`` has at least one record."""
    if not records:
        return ValidationResult(False, "no records to validate")
    if start > end:
        raise ValueError("start date must be <= end date")

    present = {r.date for r in records}
    missing = []
    cursor = start
    while cursor <= end:
        if cursor not in present:
            missing.append(cursor)
        cursor += timedelta(days=1)

    if missing:
        return ValidationResult(
            False, f"{len(missing)} days without data, first: {missing[0]}"
        )
    return ValidationResult(True, f"{(end - start).days + 1} days covered")


def check_growth_trend(
    records: Sequence[DailyMetrics], *, window_days: int = 30, min_ratio: float = 1.05
) -> ValidationResult:
    """Average active subscriptions of the last window exceed the first window."""
    if not records:
        return ValidationResult(False, "no data to assess growth")

    totals: Counter[date] = Counter()
    for r in records:
        totals[r.date] += r.active_subscriptions
    days = sorted(totals)
    if len(days) < 2 * window_days:
        return ValidationResult(
            False, f"need at least {2 * window_days} days, got {len(days)}"
        )

    first = sum(totals[d] for d in days[:window_days]) / window_days
    last = sum(totals[d] for d in days[-window_days:]) / window_days
    ratio = last / first if first > 0 else float("inf")
    if ratio < min_ratio:
        return ValidationResult(
            False, f"growth too weak: ratio={ratio:.2f} min={min_ratio}"
        )
    return ValidationResult(True, f"growth detected: ratio={ratio:.2f}")
