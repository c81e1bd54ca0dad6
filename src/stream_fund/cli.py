"""CLI entry point for Stream Fund."""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from stream_fund.adapters.reports import MarkdownVaultReport
from stream_fund.adapters.suppliers import (
    DemoChannelSupplier,
    SupabaseChannelSupplier,
    load_vault_catalog,
)
from stream_fund.config import Settings, get_settings
from stream_fund.core import ChannelMetricsSupplier, StreamFundError
from stream_fund.engines import YieldAccrualSimulator
from stream_fund.use_cases import VaultPlanningService, VaultSearchService

cli = typer.Typer(help="Creator-yield vault scoring.", no_args_is_help=True)


def build_supplier(kind: str, settings: Settings) -> ChannelMetricsSupplier:
    """Create the channel data supplier selected on the command line."""
    if kind == "demo":
        return DemoChannelSupplier(
            seed=settings.supplier.demo_seed,
            history_length=settings.supplier.history_length,
        )
    if kind == "supabase":
        return SupabaseChannelSupplier(settings)
    raise typer.BadParameter(f"unknown supplier {kind!r} (expected demo or supabase)")


@cli.command()
def plan(
    channel_ids: list[str] = typer.Argument(..., help="Channels to plan vaults for"),
    supplier: str = typer.Option("demo", "--supplier", "-s", help="demo or supabase"),
    month: Optional[int] = typer.Option(None, "--month", "-m", min=1, max=12, help="Calendar month for seasonality"),
    projection: Optional[float] = typer.Option(None, "--projection", "-p", help="Attach a yield projection for this investment"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Markdown report path"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
) -> None:
    """Forecast revenue and assemble vault terms for channels."""
    settings = get_settings(config)

    print("\n" + "=" * 70)
    print("💰 STREAM FUND - Vault planning")
    print("=" * 70)

    if supplier == "supabase":
        if settings.supabase_url:
            print("  ✓ SUPABASE_URL - reading creator profiles")
        else:
            print("  ✗ SUPABASE_URL - not set")
            raise typer.Exit(code=1)

    try:
        service = VaultPlanningService.from_settings(settings, build_supplier(supplier, settings))
    except StreamFundError as e:
        print(f"❌ {e}")
        raise typer.Exit(code=1)

    plans, errors = asyncio.run(service.plan_channels(channel_ids, month, projection))

    if plans:
        report = MarkdownVaultReport().generate(plans)
        if output is None:
            timestamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
            output = settings.output_dir / f"{timestamp}_vaults.md"
        service.save_report(report, output)

    if errors and not plans:
        raise typer.Exit(code=1)


@cli.command()
def search(
    query: str = typer.Argument(..., help='e.g. "12% APR gaming vaults under $500"'),
    catalog: Optional[Path] = typer.Option(None, "--catalog", "-c", help="YAML vault catalog (demo catalog if omitted)"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
) -> None:
    """Rank catalog vaults against a free-text query."""
    settings = get_settings(config)
    service = VaultSearchService.from_settings(settings)

    try:
        candidates = load_vault_catalog(catalog)
    except (OSError, StreamFundError) as e:
        print(f"❌ Could not load catalog: {e}")
        raise typer.Exit(code=1)

    intent, results = service.search(query, candidates)

    print()
    for ranked in results:
        c = ranked.candidate
        print(f"  [{ranked.match_score:.0%}] {c.creator} - {c.apr_percent:g}% APR, "
              f"{c.risk_level} risk, min ${c.min_investment:,.0f}")
    print()
    print(service.summarize(query, intent, results))


@cli.command()
def project(
    principal: float = typer.Argument(..., help="Amount invested"),
    apr: float = typer.Argument(..., help="APR in percent"),
    months: int = typer.Argument(..., help="Duration in months"),
) -> None:
    """Print a month-by-month compounding projection."""
    simulator = YieldAccrualSimulator()

    try:
        snapshots = list(simulator.monthly_projection(principal, apr, months))
    except StreamFundError as e:
        print(f"❌ {e}")
        raise typer.Exit(code=1)

    print(f"{'Month':>5} {'Yield':>12} {'Total':>14} {'Realized APR':>13}")
    for snap in snapshots:
        print(f"{snap.month:>5} {snap.yield_earned:>12,.2f} {snap.total_value:>14,.2f} "
              f"{snap.realized_apr_percent:>12.2f}%")

    if snapshots:
        simple = simulator.accrued(principal, apr, months * 30)
        print(f"\nCompounded yield: {snapshots[-1].total_value - principal:,.2f} "
              f"(simple interest: {simple:,.2f})")


def app() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    app()
