"""Core domain entities."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from stream_fund.core.errors import ValidationError, require_finite, require_non_negative


class RiskLevel(str, Enum):
    """Risk tier derived from a continuous risk score."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_score(cls, score: float) -> "RiskLevel":
        """Map a score to its tier. Lower bounds are inclusive."""
        if score < 0.3:
            return cls.LOW
        if score < 0.6:
            return cls.MEDIUM
        return cls.HIGH


@dataclass(frozen=True)
class ChannelMetrics:
    """Channel statistics supplied by an upstream data source."""

    subscriber_count: int
    average_views_per_video: int
    cost_per_mille: float
    channel_age_months: int
    category: str
    primary_geography: str = ""
    engagement_rate_bp: int = 0
    average_watch_time_seconds: int = 0
    total_views: int = 0
    video_count: int = 0

    def __post_init__(self) -> None:
        for name in (
            "subscriber_count",
            "average_views_per_video",
            "channel_age_months",
            "engagement_rate_bp",
            "average_watch_time_seconds",
            "total_views",
            "video_count",
        ):
            require_non_negative(name, getattr(self, name))
        if require_finite("cost_per_mille", self.cost_per_mille) <= 0:
            raise ValidationError("cost_per_mille", "must be positive")
        if not self.category:
            raise ValidationError("category", "cannot be empty")


@dataclass(frozen=True)
class RevenueBreakdown:
    """Intermediate values of a revenue forecast."""

    monthly_views: int
    effective_cpm: float
    rpm: float
    ad_impression_rate: float
    category_multiplier: float
    geo_multiplier: float
    seasonal_multiplier: float
    creator_revenue: float
    platform_revenue: float


@dataclass(frozen=True)
class ForecastResult:
    """Monthly revenue forecast for a channel."""

    current_revenue: float
    forecasted_revenue: float
    growth_rate: float
    confidence: float
    breakdown: Optional[RevenueBreakdown] = None

    def __post_init__(self) -> None:
        require_non_negative("current_revenue", self.current_revenue)
        require_non_negative("forecasted_revenue", self.forecasted_revenue)
        require_finite("growth_rate", self.growth_rate)
        if not 0.0 <= require_finite("confidence", self.confidence) <= 1.0:
            raise ValidationError("confidence", "must be within [0, 1]")

    @property
    def annual_revenue(self) -> float:
        return self.forecasted_revenue * 12


@dataclass(frozen=True)
class VaultConfiguration:
    """Funding terms of a creator vault."""

    max_funding_amount: float
    target_apr_percent: float
    duration_months: int
    risk_level: RiskLevel
    monthly_payout_amount: float

    def __post_init__(self) -> None:
        require_non_negative("max_funding_amount", self.max_funding_amount)
        require_non_negative("target_apr_percent", self.target_apr_percent)
        require_non_negative("monthly_payout_amount", self.monthly_payout_amount)
        if not 6 <= self.duration_months <= 24:
            raise ValidationError("duration_months", "must be within [6, 24]")

        expected = self.max_funding_amount * (self.target_apr_percent / 100) / 12
        if not math.isclose(self.monthly_payout_amount, expected, rel_tol=1e-9, abs_tol=1e-9):
            raise ValidationError(
                "monthly_payout_amount",
                f"expected {expected:.6f} for the given funding and APR",
            )


@dataclass(frozen=True)
class SearchIntent:
    """Filters parsed from a free-text vault search."""

    min_apr: Optional[float] = None
    category: Optional[str] = None
    risk_level: Optional[str] = None
    max_investment: Optional[float] = None
    confidence: float = 0.0
    parsed_tokens: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return (
            self.min_apr is None
            and self.category is None
            and self.risk_level is None
            and self.max_investment is None
        )


@dataclass(frozen=True)
class VaultCandidate:
    """Vault listed on the marketplace."""

    id: str
    creator: str
    category: str
    apr_percent: float
    risk_level: str
    min_investment: float
    max_funding: float = 0.0
    subscribers: float = 0.0
    monthly_views: float = 0.0
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("id", "cannot be empty")
        if not self.creator:
            raise ValidationError("creator", "cannot be empty")
        require_non_negative("apr_percent", self.apr_percent)
        require_non_negative("min_investment", self.min_investment)


@dataclass(frozen=True)
class RankedVault:
    """Vault candidate with its match score against a search intent."""

    candidate: VaultCandidate
    match_score: float


@dataclass(frozen=True)
class YieldSnapshot:
    """One month of a yield projection."""

    month: int
    yield_earned: float
    total_value: float
    realized_apr_percent: float


@dataclass(frozen=True)
class PayoutEntry:
    """Scheduled vault payout."""

    month: int
    date: str
    estimated_amount: float


@dataclass(frozen=True)
class Investment:
    """Investor position in a vault."""

    invested_amount: float
    shares: float

    def __post_init__(self) -> None:
        require_non_negative("invested_amount", self.invested_amount)
        require_non_negative("shares", self.shares)


@dataclass(frozen=True)
class VaultStats:
    """Aggregate figures for a funded vault.

    Rates are percentages: utilization of max funding, and average monthly
    revenue against the monthly payout.
    """

    total_value_locked: float
    average_monthly_revenue: float
    total_investors: int
    total_shares: float
    utilization_rate: float
    performance_score: float


@dataclass(frozen=True)
class ChannelVerification:
    """Outcome of the onboarding checks for a creator channel."""

    verified: bool
    score: float
    checks: dict[str, bool]
    recommendation: str


@dataclass(frozen=True)
class ReputationScore:
    """Weighted creator reputation on a 0-100 scale."""

    total: float
    size: float
    consistency: float
    growth: float
    engagement: float
    tier: str


@dataclass(frozen=True)
class VaultRiskAssessment:
    """Risk of a listed vault from its terms and creator."""

    score: float
    risk_level: RiskLevel
    factors: dict[str, float]


@dataclass(frozen=True)
class VaultPlan:
    """Everything computed for one channel by the planning pipeline."""

    channel_id: str
    metrics: ChannelMetrics
    forecast: ForecastResult
    risk_score: float
    vault: VaultConfiguration
    mint_eligible: bool
    projection: tuple[YieldSnapshot, ...] = ()
    verification: Optional[ChannelVerification] = None
