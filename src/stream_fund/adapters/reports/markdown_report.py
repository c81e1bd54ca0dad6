"""Markdown vault plan report."""

from datetime import date
from typing import Optional

from stream_fund.core import ReportGenerator, RiskLevel, VaultPlan

RISK_EMOJI = {
    RiskLevel.LOW: "🟢",
    RiskLevel.MEDIUM: "🟡",
    RiskLevel.HIGH: "🔴",
}


class MarkdownVaultReport(ReportGenerator):
    """Generate a markdown report from vault plans."""

    def __init__(self, report_date: Optional[date] = None) -> None:
        self.report_date = report_date or date.today()

    def generate(self, plans: list[VaultPlan]) -> str:
        """Generate markdown report."""
        title = f"# 💰 Vault plans for {self.report_date.isoformat()}"
        if not plans:
            return f"{title}\n\nNo channels were planned."

        # Largest vaults first
        ordered = sorted(plans, key=lambda p: p.vault.max_funding_amount, reverse=True)

        lines = [
            title,
            "",
            f"Channels planned: {len(plans)}",
            f"Mint-eligible: {sum(1 for p in plans if p.mint_eligible)}",
            "",
        ]

        for plan in ordered:
            lines.extend(self._format_plan(plan))

        return "\n".join(lines)

    def _format_plan(self, plan: VaultPlan) -> list[str]:
        """Format single vault plan."""
        vault = plan.vault
        forecast = plan.forecast
        emoji = RISK_EMOJI[vault.risk_level]

        lines = [
            f"## {plan.channel_id} ({plan.metrics.category})",
            "",
            "| Term | Value |",
            "| --- | --- |",
            f"| Max funding | ${vault.max_funding_amount:,.2f} |",
            f"| Target APR | {vault.target_apr_percent:.2f}% |",
            f"| Duration | {vault.duration_months} months |",
            f"| Risk | {emoji} {vault.risk_level.value} ({plan.risk_score:.2f}) |",
            f"| Monthly payout | ${vault.monthly_payout_amount:,.2f} |",
            "",
            f"**Forecast:** ${forecast.forecasted_revenue:,.2f}/month "
            f"(current ${forecast.current_revenue:,.2f}, growth {forecast.growth_rate:.0%}, "
            f"confidence {forecast.confidence:.0%})",
            "",
        ]

        if forecast.breakdown:
            b = forecast.breakdown
            lines.append(
                f"*views/month: {b.monthly_views:,} | effective CPM: ${b.effective_cpm:.2f} | "
                f"RPM: ${b.rpm:.2f} | ad impressions: {b.ad_impression_rate:.1%}*"
            )
            lines.append("")

        if plan.projection:
            lines.extend([
                "**Projection:**",
                "",
                "| Month | Yield | Total | Realized APR |",
                "| --- | --- | --- | --- |",
            ])
            for snap in plan.projection:
                lines.append(
                    f"| {snap.month} | ${snap.yield_earned:,.2f} | ${snap.total_value:,.2f} | "
                    f"{snap.realized_apr_percent:.2f}% |"
                )
            lines.append("")

        if plan.verification:
            v = plan.verification
            failed = [name for name, passed in v.checks.items() if not passed]
            line = f"**Channel checks:** {v.score:g}% - {v.recommendation}"
            if failed:
                line += f" (failed: {', '.join(failed)})"
            lines.append(line)
            lines.append("")

        status = "✓ eligible to mint" if plan.mint_eligible else "✗ not eligible to mint"
        lines.append(f"*{status}*")
        lines.append("")
        lines.append("---")
        lines.append("")

        return lines
