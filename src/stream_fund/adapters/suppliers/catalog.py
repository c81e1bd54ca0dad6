"""Vault catalog loading."""

import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

import yaml

from stream_fund.core import ValidationError, VaultCandidate
from stream_fund.engines.search import parse_compact_number, vault_tags

DEMO_CATALOG: list[dict[str, Any]] = [
    {"id": "1", "creator": "TechGaming Pro", "category": "gaming", "apr": "14.2%",
     "risk": "low", "min_investment": "$100", "max_funding": "$250,000",
     "subscribers": "2.4M", "monthly_views": "25M"},
    {"id": "2", "creator": "MusicMaven", "category": "music", "apr": "11.8%",
     "risk": "medium", "min_investment": "$250", "max_funding": "$120,000",
     "subscribers": "850K", "monthly_views": "9.5M"},
    {"id": "3", "creator": "EduTech Academy", "category": "education", "apr": "9.5%",
     "risk": "low", "min_investment": "$500", "max_funding": "$80,000",
     "subscribers": "420K", "monthly_views": "3.1M"},
    {"id": "4", "creator": "DIY Dynasty", "category": "diy", "apr": "16.5%",
     "risk": "high", "min_investment": "$50", "max_funding": "$40,000",
     "subscribers": "95K", "monthly_views": "1.2M"},
    {"id": "5", "creator": "Pixel Arena", "category": "gaming", "apr": "12.4%",
     "risk": "medium", "min_investment": "$1,000", "max_funding": "$150,000",
     "subscribers": "1.1M", "monthly_views": "14M"},
]

# "1,000", "14.2", "2.4M" once "$" and "%" are stripped
NUMBER_PATTERN = re.compile(r"^\d+(?:\.\d+)?\s*[KMB]?$", re.IGNORECASE)


def _number(field: str, raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValidationError(field, f"expected a number, got {raw!r}")
    if isinstance(raw, (int, float)):
        return float(raw)

    text = str(raw).replace("$", "").replace("%", "").replace(",", "").strip()
    if not NUMBER_PATTERN.match(text):
        raise ValidationError(field, f"expected a number, got {raw!r}")
    return parse_compact_number(text)


def candidate_from_record(record: Any) -> VaultCandidate:
    """Build a candidate from a catalog record.

    Numbers may be given as plain values or display strings ("$1,000",
    "14.2%", "2.4M"). Values that do not parse are rejected rather than
    read as zero.
    """
    if not isinstance(record, dict):
        raise ValidationError("catalog", f"each vault must be a mapping, got {type(record).__name__}")

    try:
        candidate = VaultCandidate(
            id=str(record["id"]),
            creator=str(record["creator"]),
            category=str(record.get("category", "")).lower(),
            apr_percent=_number("apr", record["apr"]),
            risk_level=str(record.get("risk", "medium")).lower(),
            min_investment=_number("min_investment", record.get("min_investment", 0)),
            max_funding=_number("max_funding", record.get("max_funding", 0)),
            subscribers=_number("subscribers", record.get("subscribers", 0)),
            monthly_views=_number("monthly_views", record.get("monthly_views", 0)),
        )
    except KeyError as e:
        raise ValidationError(str(e.args[0]), "missing from catalog record") from e

    return replace(candidate, tags=vault_tags(candidate))


def load_vault_catalog(path: Optional[Path] = None) -> list[VaultCandidate]:
    """Load candidates from a YAML list, or the demo catalog when no path is given."""
    if path is None:
        records = DEMO_CATALOG
    else:
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or []
            except yaml.YAMLError as e:
                raise ValidationError("catalog", f"invalid YAML in {path}: {e}") from e
        records = data.get("vaults", []) if isinstance(data, dict) else data

    if not isinstance(records, list):
        raise ValidationError("catalog", "expected a list of vaults")

    return [candidate_from_record(record) for record in records]
