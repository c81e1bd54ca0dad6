"""Revenue forecast for a creator channel.

Revenue is modeled as ad inventory priced by CPM:

    effective CPM = CPM x category x geography x season
    RPM           = effective CPM x ad impression rate x creator share
    revenue       = monthly views x RPM / 1000

Multiplier tables are injected through ``RateTables`` so categories and
regions can be added from configuration.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from stream_fund.config import ForecastConfig
from stream_fund.core import ChannelMetrics, ForecastResult, RevenueBreakdown, ValidationError

CREATOR_SHARE = 0.68
PLATFORM_SHARE = 1 - CREATOR_SHARE

BASE_IMPRESSION_RATE = 0.85
MAX_IMPRESSION_RATE = 0.95

BASE_CONFIDENCE = 0.50
MAX_CONFIDENCE = 0.95

DAYS_PER_MONTH = 30


@dataclass(frozen=True)
class RateTables:
    """Multiplier lookups. Unknown keys return the neutral 1.0."""

    categories: Mapping[str, float] = field(default_factory=dict)
    geographies: Mapping[str, float] = field(default_factory=dict)
    seasons: Mapping[int, float] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: ForecastConfig) -> "RateTables":
        return cls(
            categories={k.lower(): float(v) for k, v in config.category_multipliers.items()},
            geographies={k.upper(): float(v) for k, v in config.geo_multipliers.items()},
            seasons={int(k): float(v) for k, v in config.seasonal_factors.items()},
        )

    def category_multiplier(self, name: str) -> float:
        return self.categories.get(name.lower(), 1.0)

    def geo_multiplier(self, name: str) -> float:
        return self.geographies.get(name.upper(), 1.0)

    def seasonal_multiplier(self, month: int) -> float:
        return self.seasons.get(month, 1.0)


class RevenueForecastCalculator:
    """Forecast monthly creator revenue from channel metrics."""

    def __init__(self, tables: Optional[RateTables] = None, growth_rate: float = 0.15) -> None:
        self.tables = tables or RateTables.from_config(ForecastConfig())
        self.growth_rate = growth_rate

    @classmethod
    def from_config(cls, config: ForecastConfig) -> "RevenueForecastCalculator":
        return cls(RateTables.from_config(config), growth_rate=config.growth_rate)

    def forecast(self, metrics: ChannelMetrics, current_month: int) -> ForecastResult:
        """Forecast revenue for the given calendar month (1-12)."""
        if not 1 <= current_month <= 12:
            raise ValidationError("current_month", "must be within 1-12")

        category = self.tables.category_multiplier(metrics.category)
        geo = self.tables.geo_multiplier(metrics.primary_geography)
        season = self.tables.seasonal_multiplier(current_month)

        effective_cpm = metrics.cost_per_mille * category * geo * season
        impression_rate = ad_impression_rate(metrics)
        rpm = effective_cpm * impression_rate * CREATOR_SHARE

        monthly_views = estimate_monthly_views(metrics)
        forecasted = monthly_views * rpm / 1000

        return ForecastResult(
            current_revenue=forecasted / (1 + self.growth_rate),
            forecasted_revenue=forecasted,
            growth_rate=self.growth_rate,
            confidence=confidence_score(metrics),
            breakdown=RevenueBreakdown(
                monthly_views=monthly_views,
                effective_cpm=effective_cpm,
                rpm=rpm,
                ad_impression_rate=impression_rate,
                category_multiplier=category,
                geo_multiplier=geo,
                seasonal_multiplier=season,
                creator_revenue=forecasted,
                platform_revenue=forecasted / CREATOR_SHARE * PLATFORM_SHARE,
            ),
        )


def ad_impression_rate(metrics: ChannelMetrics) -> float:
    """Share of views that serve an ad."""
    rate = BASE_IMPRESSION_RATE

    if metrics.engagement_rate_bp > 500:
        rate += 0.10
    elif metrics.engagement_rate_bp > 300:
        rate += 0.05

    if metrics.average_watch_time_seconds > 300:
        rate += 0.05
    elif metrics.average_watch_time_seconds > 180:
        rate += 0.025

    return min(rate, MAX_IMPRESSION_RATE)


def estimate_monthly_views(metrics: ChannelMetrics) -> int:
    views = metrics.average_views_per_video * DAYS_PER_MONTH

    # Channels without subscribers get no engagement adjustment
    if metrics.subscriber_count > 0:
        sub_engagement = metrics.average_views_per_video / metrics.subscriber_count * 100
        if sub_engagement > 10:
            views *= 1.1
        elif sub_engagement < 2:
            views *= 0.9

    return round(views)


def confidence_score(metrics: ChannelMetrics) -> float:
    confidence = BASE_CONFIDENCE

    if metrics.channel_age_months > 24:
        confidence += 0.20
    elif metrics.channel_age_months > 12:
        confidence += 0.10

    if metrics.subscriber_count > 1_000_000:
        confidence += 0.20
    elif metrics.subscriber_count > 100_000:
        confidence += 0.15
    elif metrics.subscriber_count > 10_000:
        confidence += 0.10

    if metrics.engagement_rate_bp > 500:
        confidence += 0.10
    elif metrics.engagement_rate_bp > 300:
        confidence += 0.05

    return min(round(confidence, 4), MAX_CONFIDENCE)
