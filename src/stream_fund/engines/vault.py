"""Vault term calculators."""

import math
import re
from typing import Optional

from stream_fund.config import VaultConfig
from stream_fund.core import ForecastResult, RiskLevel, ValidationError, VaultConfiguration
from stream_fund.core.errors import require_finite, require_non_negative
from stream_fund.engines.risk import clamp_unit

MIN_DURATION_MONTHS = 6
MAX_DURATION_MONTHS = 24

MINT_MIN_CONFIDENCE = 0.8
MINT_MIN_FUNDING = 1000.0


class FundingCapCalculator:
    """Maximum fundable amount as a multiple of monthly revenue."""

    def max_cap(self, forecasted_revenue: float, risk_score: float) -> float:
        revenue = require_non_negative("forecasted_revenue", forecasted_revenue)
        return revenue * self.multiplier(risk_score)

    def multiplier(self, risk_score: float) -> int:
        risk = require_finite("risk_score", risk_score)
        if risk < 0.3:
            return 8
        if risk < 0.6:
            return 6
        return 4


class DurationAdvisor:
    """Recommend a vault duration from audience size and payout cadence."""

    def recommend(self, estimated_view_count: float, payout_gap_months: float) -> int:
        views = require_finite("estimated_view_count", estimated_view_count)
        gap = require_finite("payout_gap_months", payout_gap_months)
        if views < 1:
            raise ValidationError("estimated_view_count", "must be at least 1")
        if gap <= 0:
            raise ValidationError("payout_gap_months", "must be positive")

        months = round(math.log(views) / gap)
        return max(MIN_DURATION_MONTHS, min(MAX_DURATION_MONTHS, months))


class APRCalculator:
    """Target APR as a base rate plus a premium linear in risk."""

    def __init__(self, risk_premium_percent: float = 8.0) -> None:
        self.risk_premium_percent = risk_premium_percent

    def calculate(self, base_rate_percent: float, risk_score: float) -> float:
        base = require_non_negative("base_rate_percent", base_rate_percent)
        risk = clamp_unit(require_finite("risk_score", risk_score))
        return base + risk * self.risk_premium_percent


class VaultConfigAssembler:
    """Compose funding cap, APR and duration into vault terms."""

    def __init__(
        self,
        base_apr_percent: float = 8.5,
        funding_cap: Optional[FundingCapCalculator] = None,
        apr: Optional[APRCalculator] = None,
    ) -> None:
        self.base_apr_percent = base_apr_percent
        self.funding_cap = funding_cap or FundingCapCalculator()
        self.apr = apr or APRCalculator()

    @classmethod
    def from_config(cls, config: VaultConfig) -> "VaultConfigAssembler":
        return cls(
            base_apr_percent=config.base_apr_percent,
            apr=APRCalculator(config.risk_premium_percent),
        )

    def assemble(
        self, forecast: ForecastResult, risk_score: float, duration_months: int
    ) -> VaultConfiguration:
        risk = clamp_unit(require_finite("risk_score", risk_score))
        max_cap = self.funding_cap.max_cap(forecast.forecasted_revenue, risk)
        target_apr = self.apr.calculate(self.base_apr_percent, risk)

        return VaultConfiguration(
            max_funding_amount=max_cap,
            target_apr_percent=target_apr,
            duration_months=duration_months,
            risk_level=RiskLevel.from_score(risk),
            monthly_payout_amount=max_cap * (target_apr / 100) / 12,
        )


def nft_metadata(creator: str, config: VaultConfiguration) -> dict:
    """Metadata for the yield NFT minted against a vault."""
    if not creator.strip():
        raise ValidationError("creator", "cannot be empty")

    token = re.sub(r"\s+", "", creator).upper()

    return {
        "name": f"STREAM-{token}",
        "description": f"Yield NFT backed by {creator}'s YouTube revenue stream",
        "attributes": [
            {"trait_type": "APR", "value": f"{config.target_apr_percent:.1f}%"},
            {"trait_type": "Duration", "value": f"{config.duration_months} months"},
            {"trait_type": "Risk Level", "value": config.risk_level.value},
            {"trait_type": "Max Funding", "value": f"${config.max_funding_amount:,.0f}"},
        ],
    }


def mint_eligible(forecast: ForecastResult, config: VaultConfiguration) -> bool:
    """Whether a vault is confident and large enough to mint."""
    return forecast.confidence > MINT_MIN_CONFIDENCE and config.max_funding_amount > MINT_MIN_FUNDING
