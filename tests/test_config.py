"""Tests for configuration loading."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

from stream_fund.config import Settings, get_settings


def test_defaults_without_file() -> None:
    with patch.dict("os.environ", {}, clear=True):
        settings = get_settings(Path("/nonexistent/config.yaml"))

    assert settings.supabase_url == ""
    assert settings.supabase_key is None
    assert settings.base_apr_percent == 8.5
    assert settings.min_match_score == 0.3
    assert settings.forecast.growth_rate == 0.15
    assert settings.forecast.seasonal_factors[12] == 1.40


def test_credentials_from_environment() -> None:
    env = {"SUPABASE_URL": "https://demo.supabase.co", "SUPABASE_ANON_KEY": "anon"}
    with patch.dict("os.environ", env, clear=True):
        settings = get_settings(Path("/nonexistent/config.yaml"))

    assert settings.supabase_url == "https://demo.supabase.co"
    assert settings.supabase_key == "anon"


def test_yaml_overrides() -> None:
    """Rate tables merge; scalar settings replace."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        path.write_text(
            "forecast:\n"
            "  growth_rate: 0.1\n"
            "  category_multipliers:\n"
            "    music: 1.0\n"
            "vault:\n"
            "  base_apr_percent: 9.0\n"
            "search:\n"
            "  min_match_score: 0.5\n"
            "  categories: [gaming]\n"
            "supplier:\n"
            "  max_retries: 5\n"
            "output_dir: out\n",
            encoding="utf-8",
        )

        settings = get_settings(path)

    assert settings.forecast.growth_rate == 0.1
    assert settings.forecast.category_multipliers["music"] == 1.0
    assert settings.forecast.category_multipliers["gaming"] == 0.85
    assert settings.base_apr_percent == 9.0
    assert settings.vault.risk_premium_percent == 8.0
    assert settings.min_match_score == 0.5
    assert settings.search.categories == ["gaming"]
    assert settings.supplier.max_retries == 5
    assert settings.output_dir == Path("out")


def test_sections_are_independent() -> None:
    """Defaults are not shared between Settings instances."""
    first = Settings()
    first.forecast.category_multipliers["gaming"] = 2.0

    assert Settings().forecast.category_multipliers["gaming"] == 0.85


def test_unknown_forecast_key() -> None:
    """Unknown keys are stored like in the other sections instead of failing."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        path.write_text("forecast:\n  growth: 0.2\n", encoding="utf-8")

        settings = get_settings(path)

    assert settings.forecast.growth_rate == 0.15
    assert settings.forecast.growth == 0.2
