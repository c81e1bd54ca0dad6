"""Report generators."""

from stream_fund.adapters.reports.markdown_report import MarkdownVaultReport

__all__ = ["MarkdownVaultReport"]
