"""Core domain layer."""

from stream_fund.core.entities import (
    ChannelMetrics,
    ChannelVerification,
    ForecastResult,
    Investment,
    PayoutEntry,
    RankedVault,
    ReputationScore,
    RevenueBreakdown,
    RiskLevel,
    SearchIntent,
    VaultCandidate,
    VaultConfiguration,
    VaultPlan,
    VaultRiskAssessment,
    VaultStats,
    YieldSnapshot,
)
from stream_fund.core.errors import StreamFundError, SupplierError, ValidationError
from stream_fund.core.interfaces import ChannelMetricsSupplier, ReportGenerator

__all__ = [
    "ChannelMetrics",
    "ChannelVerification",
    "ForecastResult",
    "Investment",
    "PayoutEntry",
    "RankedVault",
    "ReputationScore",
    "RevenueBreakdown",
    "RiskLevel",
    "SearchIntent",
    "VaultCandidate",
    "VaultConfiguration",
    "VaultPlan",
    "VaultRiskAssessment",
    "VaultStats",
    "YieldSnapshot",
    "StreamFundError",
    "SupplierError",
    "ValidationError",
    "ChannelMetricsSupplier",
    "ReportGenerator",
]
