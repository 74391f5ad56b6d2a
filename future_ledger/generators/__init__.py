"""Sample data generators."""

from future_ledger.generators.settings import SampleSettingsGenerator

__all__ = ["SampleSettingsGenerator"]
