"""Channel data suppliers and vault catalogs."""

from stream_fund.adapters.suppliers.catalog import load_vault_catalog
from stream_fund.adapters.suppliers.demo_supplier import DemoChannelSupplier
from stream_fund.adapters.suppliers.supabase_supplier import SupabaseChannelSupplier

__all__ = ["DemoChannelSupplier", "SupabaseChannelSupplier", "load_vault_catalog"]
