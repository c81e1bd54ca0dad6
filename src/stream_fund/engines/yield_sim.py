"""Yield accrual and payout projections."""

import calendar
from datetime import date
from typing import Iterator, Optional, Sequence

from stream_fund.core import (
    Investment,
    PayoutEntry,
    ValidationError,
    VaultConfiguration,
    VaultStats,
    YieldSnapshot,
)
from stream_fund.core.errors import require_finite, require_non_negative

DAYS_PER_YEAR = 365
MONTHS_PER_YEAR = 12
DEFAULT_THRESHOLD = 0.6

DISTRIBUTION_RATE = 0.8  # share of creator revenue paid out to investors
PENALTY_RATE = 1.2
MAX_PENALTY_SHARE = 0.1  # of max funding


class MonthlyProjection:
    """Month-by-month compounding projection.

    Iterating computes snapshots lazily; every iteration starts again from
    the principal, so the same projection can be consumed more than once.
    """

    def __init__(self, principal: float, apr_percent: float, duration_months: int) -> None:
        self.principal = require_non_negative("principal", principal)
        self.apr_percent = require_non_negative("apr_percent", apr_percent)
        if duration_months < 0:
            raise ValidationError("duration_months", "cannot be negative")
        self.duration_months = duration_months

    def __iter__(self) -> Iterator[YieldSnapshot]:
        monthly_rate = self.apr_percent / 100 / MONTHS_PER_YEAR
        total = self.principal

        for month in range(1, self.duration_months + 1):
            # Each month earns on the previous month's total
            earned = total * monthly_rate
            total += earned

            if self.principal > 0:
                realized = (total - self.principal) / self.principal * (MONTHS_PER_YEAR / month) * 100
            else:
                realized = 0.0

            yield YieldSnapshot(
                month=month,
                yield_earned=earned,
                total_value=total,
                realized_apr_percent=realized,
            )

    def __len__(self) -> int:
        return self.duration_months


class YieldAccrualSimulator:
    """Simple and compounding yield calculations."""

    def accrued(self, principal: float, apr_percent: float, elapsed_days: float) -> float:
        """Simple interest earned after a number of days."""
        principal = require_non_negative("principal", principal)
        apr = require_non_negative("apr_percent", apr_percent)
        days = require_non_negative("elapsed_days", elapsed_days)
        return principal * (apr / 100 / DAYS_PER_YEAR) * days

    def compound(
        self, principal: float, apr_percent: float, periods_per_year: float, years: float
    ) -> float:
        """Final amount with compounding: P(1 + r/n)^(nt)."""
        principal = require_non_negative("principal", principal)
        apr = require_non_negative("apr_percent", apr_percent)
        if require_finite("periods_per_year", periods_per_year) <= 0:
            raise ValidationError("periods_per_year", "must be positive")
        if require_finite("years", years) <= 0:
            raise ValidationError("years", "must be positive")

        return principal * (1 + apr / 100 / periods_per_year) ** (periods_per_year * years)

    def effective_apy(self, apr_percent: float, periods_per_year: float) -> float:
        """Annual yield in percent after one year of compounding."""
        return (self.compound(1.0, apr_percent, periods_per_year, 1) - 1) * 100

    def monthly_projection(
        self, principal: float, apr_percent: float, duration_months: int
    ) -> MonthlyProjection:
        return MonthlyProjection(principal, apr_percent, duration_months)


def payout_schedule(config: VaultConfiguration, start: Optional[date] = None) -> list[PayoutEntry]:
    """Monthly payouts over the vault duration, starting one month after start."""
    start = start or date.today()

    return [
        PayoutEntry(
            month=month,
            date=add_months(start, month).isoformat(),
            estimated_amount=config.monthly_payout_amount,
        )
        for month in range(1, config.duration_months + 1)
    ]


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month."""
    index = start.month - 1 + months
    year = start.year + index // 12
    month = index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def actual_apr(invested: float, current_value: float, elapsed_days: float) -> float:
    """Annualized return in percent realized so far."""
    if require_finite("invested", invested) <= 0:
        raise ValidationError("invested", "must be positive")
    if require_finite("elapsed_days", elapsed_days) <= 0:
        raise ValidationError("elapsed_days", "must be positive")

    gain = require_finite("current_value", current_value) - invested
    return gain / invested * (DAYS_PER_YEAR / elapsed_days) * 100


def performance_vs_target(actual_apr_percent: float, target_apr_percent: float) -> float:
    """Realized APR as a percentage of the target APR."""
    if require_finite("target_apr_percent", target_apr_percent) <= 0:
        raise ValidationError("target_apr_percent", "must be positive")
    return require_finite("actual_apr_percent", actual_apr_percent) / target_apr_percent * 100


def is_default(actual_revenue: float, expected_revenue: float, threshold: float = DEFAULT_THRESHOLD) -> bool:
    """True when revenue falls below the threshold share of what was expected."""
    actual = require_non_negative("actual_revenue", actual_revenue)
    if require_finite("expected_revenue", expected_revenue) <= 0:
        raise ValidationError("expected_revenue", "must be positive")
    return actual / expected_revenue < threshold


def investor_payout(
    total_revenue: float,
    user_shares: float,
    total_shares: float,
    distribution_rate: float = DISTRIBUTION_RATE,
) -> float:
    """Pro-rata share of the distributed revenue for one investor."""
    revenue = require_non_negative("total_revenue", total_revenue)
    shares = require_non_negative("user_shares", user_shares)
    if require_finite("total_shares", total_shares) <= 0:
        raise ValidationError("total_shares", "must be positive")
    if shares > total_shares:
        raise ValidationError("user_shares", "cannot exceed total_shares")

    return revenue * distribution_rate * (shares / total_shares)


def default_penalty(shortfall: float, max_funding: float) -> float:
    """Penalty for a revenue shortfall, capped at 10% of the vault."""
    shortfall = require_non_negative("shortfall", shortfall)
    cap = require_non_negative("max_funding", max_funding) * MAX_PENALTY_SHARE
    return min(shortfall * PENALTY_RATE, cap)


def vault_stats(
    config: VaultConfiguration,
    investments: Sequence[Investment],
    revenue_history: Sequence[float],
) -> VaultStats:
    if not revenue_history:
        raise ValidationError("revenue_history", "must contain at least one entry")
    if config.max_funding_amount <= 0:
        raise ValidationError("max_funding_amount", "must be positive")
    if config.monthly_payout_amount <= 0:
        raise ValidationError("monthly_payout_amount", "must be positive")

    revenues = [require_non_negative("revenue_history", r) for r in revenue_history]
    total_invested = sum(i.invested_amount for i in investments)
    average_revenue = sum(revenues) / len(revenues)

    return VaultStats(
        total_value_locked=total_invested,
        average_monthly_revenue=average_revenue,
        total_investors=len(investments),
        total_shares=sum(i.shares for i in investments),
        utilization_rate=total_invested / config.max_funding_amount * 100,
        performance_score=average_revenue / config.monthly_payout_amount * 100,
    )
