"""Business logic use cases."""

from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from stream_fund.config import Settings
from stream_fund.core import (
    ChannelMetricsSupplier,
    RankedVault,
    SearchIntent,
    StreamFundError,
    VaultCandidate,
    VaultPlan,
)
from stream_fund.engines import (
    CreatorScoreVerifier,
    DurationAdvisor,
    IntentParser,
    MatchScorer,
    RevenueForecastCalculator,
    VaultConfigAssembler,
    VolatilityRiskScorer,
    YieldAccrualSimulator,
    mint_eligible,
)
from stream_fund.engines.search import describe_intent, recommend, summarize_results


class VaultPlanningService:
    """Service for turning channel data into vault terms."""

    def __init__(
        self,
        supplier: ChannelMetricsSupplier,
        forecaster: RevenueForecastCalculator,
        assembler: VaultConfigAssembler,
        risk_scorer: Optional[VolatilityRiskScorer] = None,
        duration_advisor: Optional[DurationAdvisor] = None,
        simulator: Optional[YieldAccrualSimulator] = None,
        verifier: Optional[CreatorScoreVerifier] = None,
        payout_gap_months: float = 1.0,
    ) -> None:
        self.supplier = supplier
        self.forecaster = forecaster
        self.assembler = assembler
        self.risk_scorer = risk_scorer or VolatilityRiskScorer()
        self.duration_advisor = duration_advisor or DurationAdvisor()
        self.simulator = simulator or YieldAccrualSimulator()
        self.verifier = verifier or CreatorScoreVerifier()
        self.payout_gap_months = payout_gap_months

    @classmethod
    def from_settings(cls, settings: Settings, supplier: ChannelMetricsSupplier) -> "VaultPlanningService":
        return cls(
            supplier=supplier,
            forecaster=RevenueForecastCalculator.from_config(settings.forecast),
            assembler=VaultConfigAssembler.from_config(settings.vault),
            payout_gap_months=settings.payout_gap_months,
        )

    async def plan_channel(
        self,
        channel_id: str,
        current_month: Optional[int] = None,
        projection_principal: Optional[float] = None,
    ) -> VaultPlan:
        """Run the full pipeline for one channel.

        Args:
            channel_id: Channel to fetch from the supplier
            current_month: Calendar month for seasonality (defaults to this month)
            projection_principal: If given, attach a monthly yield projection
                for this investment over the vault duration
        """
        month = current_month or date.today().month

        metrics = await self.supplier.fetch_channel_metrics(channel_id)
        history = await self.supplier.fetch_view_history(channel_id)

        verification = self.verifier.verify(metrics)
        forecast = self.forecaster.forecast(metrics, month)
        risk = self.risk_scorer.score(history, metrics.channel_age_months)

        monthly_views = forecast.breakdown.monthly_views if forecast.breakdown else 0
        duration = self.duration_advisor.recommend(max(monthly_views, 1), self.payout_gap_months)

        vault = self.assembler.assemble(forecast, risk, duration)

        projection = ()
        if projection_principal is not None:
            projection = tuple(self.simulator.monthly_projection(
                projection_principal, vault.target_apr_percent, vault.duration_months
            ))

        return VaultPlan(
            channel_id=channel_id,
            metrics=metrics,
            forecast=forecast,
            risk_score=risk,
            vault=vault,
            mint_eligible=mint_eligible(forecast, vault),
            projection=projection,
            verification=verification,
        )

    async def plan_channels(
        self,
        channel_ids: list[str],
        current_month: Optional[int] = None,
        projection_principal: Optional[float] = None,
    ) -> tuple[list[VaultPlan], dict[str, StreamFundError]]:
        """Plan several channels; a failing channel does not stop the rest.

        Returns:
            Tuple of (plans, errors by channel id)
        """
        name = getattr(self.supplier, "name", self.supplier.__class__.__name__)
        emoji = getattr(self.supplier, "emoji", "•")
        print(f"\n{emoji} Data source: {name}")

        plans: list[VaultPlan] = []
        errors: dict[str, StreamFundError] = {}

        for i, channel_id in enumerate(channel_ids, 1):
            print(f"\n  [{i}/{len(channel_ids)}] {channel_id}")
            try:
                plan = await self.plan_channel(channel_id, current_month, projection_principal)
            except StreamFundError as e:
                print(f"  └─ ⚠️  Error: {e}")
                errors[channel_id] = e
                continue

            vault = plan.vault
            print(f"  └─ ✓ ${vault.max_funding_amount:,.0f} @ {vault.target_apr_percent:.2f}% "
                  f"for {vault.duration_months} months ({vault.risk_level.value} risk)")
            if plan.verification and not plan.verification.verified:
                print(f"     ⚠️  Channel checks: {plan.verification.score:g}% ({plan.verification.recommendation})")
            plans.append(plan)

        print(f"\n✓ Planned: {len(plans)}")
        if errors:
            print(f"⚠️  Errors: {len(errors)}")

        return plans, errors

    def save_report(self, report: str, output_path: Path) -> None:
        """Save report to file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report, encoding="utf-8")
        print(f"Report saved to {output_path}")


class VaultSearchService:
    """Service for matching free-text queries against a vault catalog."""

    def __init__(self, parser: IntentParser, scorer: MatchScorer) -> None:
        self.parser = parser
        self.scorer = scorer

    @classmethod
    def from_settings(cls, settings: Settings) -> "VaultSearchService":
        return cls(
            parser=IntentParser(settings.search.categories),
            scorer=MatchScorer(settings.min_match_score),
        )

    def search(
        self, query: str, candidates: Iterable[VaultCandidate]
    ) -> tuple[SearchIntent, list[RankedVault]]:
        """Parse the query and rank candidates against it."""
        intent = self.parser.parse(query)

        if intent.is_empty:
            print(f"⚠️  No filters recognized in query: {query!r}")
        else:
            print(f"🔍 {describe_intent(intent)} (confidence {intent.confidence:.0%})")

        return intent, self.scorer.rank(candidates, intent)

    def summarize(self, query: str, intent: SearchIntent, results: list[RankedVault]) -> str:
        return summarize_results(query, results, intent)

    def recommend(
        self, history: list[VaultCandidate], candidates: Iterable[VaultCandidate]
    ) -> list[VaultCandidate]:
        """Recommend vaults the investor has not already invested in."""
        held = {v.id for v in history}
        return recommend(history, [c for c in candidates if c.id not in held])
