"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class ForecastConfig:
    """Revenue forecast settings."""
    growth_rate: float = 0.15
    category_multipliers: dict = field(default_factory=lambda: {
        "gaming": 0.85,
        "tech": 1.20,
        "finance": 1.50,
        "lifestyle": 0.70,
        "education": 0.90,
        "entertainment": 0.80,
    })
    geo_multipliers: dict = field(default_factory=lambda: {
        "US": 1.50,
        "UK": 1.20,
        "DE": 1.10,
        "CA": 1.30,
        "AU": 1.15,
        "IN": 0.30,
        "ID": 0.25,
        "BR": 0.40,
    })
    # Ad spend peaks in Q4
    seasonal_factors: dict = field(default_factory=lambda: {
        1: 0.90, 2: 0.85, 3: 0.95, 4: 1.00, 5: 1.05, 6: 0.95,
        7: 0.90, 8: 0.95, 9: 1.05, 10: 1.15, 11: 1.30, 12: 1.40,
    })


@dataclass
class VaultConfig:
    """Vault term settings."""
    base_apr_percent: float = 8.5
    risk_premium_percent: float = 8.0
    payout_gap_months: float = 1.0


@dataclass
class SearchConfig:
    """Vault search settings."""
    min_match_score: float = 0.3
    categories: list = field(default_factory=lambda: [
        "gaming", "music", "education", "tech", "diy", "lifestyle",
    ])


@dataclass
class SupplierConfig:
    """Channel data supplier settings."""
    max_retries: int = 3
    initial_retry_delay: float = 1.0
    timeout: float = 30.0
    demo_seed: int = 42
    history_length: int = 6


@dataclass
class Settings:
    """Application settings."""

    # Credentials (from environment only)
    supabase_url: str = ""
    supabase_key: Optional[str] = None

    # Config sections
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    vault: VaultConfig = field(default_factory=VaultConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    supplier: SupplierConfig = field(default_factory=SupplierConfig)
    output_dir: Path = Path("reports")

    @property
    def base_apr_percent(self) -> float:
        return self.vault.base_apr_percent

    @property
    def payout_gap_months(self) -> float:
        return self.vault.payout_gap_months

    @property
    def min_match_score(self) -> float:
        return self.search.min_match_score


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        supabase_url=os.getenv("SUPABASE_URL", ""),
        supabase_key=os.getenv("SUPABASE_ANON_KEY"),
    )

    # Tables are merged so a config file only needs the entries it changes
    if "forecast" in config:
        for key, value in config["forecast"].items():
            current = getattr(settings.forecast, key, None)
            if isinstance(current, dict):
                current.update(value or {})
            else:
                setattr(settings.forecast, key, value)

    if "vault" in config:
        for key, value in config["vault"].items():
            setattr(settings.vault, key, value)

    if "search" in config:
        settings.search = SearchConfig(**config["search"])

    if "supplier" in config:
        for key, value in config["supplier"].items():
            setattr(settings.supplier, key, value)

    if "output_dir" in config:
        settings.output_dir = Path(config["output_dir"])

    return settings
