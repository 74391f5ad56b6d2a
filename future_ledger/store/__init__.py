"""Settings aggregate and its persistence."""

from future_ledger.store.json_file import JsonSettingsStore
from future_ledger.store.settings import Settings

__all__ = ["JsonSettingsStore", "Settings"]
