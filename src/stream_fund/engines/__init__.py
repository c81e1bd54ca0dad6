"""Pure calculators of the vault scoring pipeline."""

from stream_fund.engines.creator import CreatorScoreVerifier
from stream_fund.engines.forecast import RateTables, RevenueForecastCalculator
from stream_fund.engines.risk import VolatilityRiskScorer, classify_vault_risk
from stream_fund.engines.search import IntentParser, MatchScorer
from stream_fund.engines.vault import (
    APRCalculator,
    DurationAdvisor,
    FundingCapCalculator,
    VaultConfigAssembler,
    mint_eligible,
    nft_metadata,
)
from stream_fund.engines.yield_sim import (
    MonthlyProjection,
    YieldAccrualSimulator,
    payout_schedule,
    vault_stats,
)

__all__ = [
    "CreatorScoreVerifier",
    "RateTables",
    "RevenueForecastCalculator",
    "VolatilityRiskScorer",
    "classify_vault_risk",
    "IntentParser",
    "MatchScorer",
    "APRCalculator",
    "DurationAdvisor",
    "FundingCapCalculator",
    "VaultConfigAssembler",
    "mint_eligible",
    "nft_metadata",
    "MonthlyProjection",
    "YieldAccrualSimulator",
    "payout_schedule",
    "vault_stats",
]
