"""Configuration management for future-ledger."""

from dataclasses import dataclass, field
from pathlib import Path

from future_ledger.exceptions import ConfigurationError


@dataclass
class ProjectionConfig:
    """Month horizons used by the projection pipeline."""

    virtual_months: int = 6  # goal/fund projections, starting at next month
    pending_window_months: int = 7  # pending list shows [next month, +7)
    chart_months: int = 6  # current month + 5 future buckets
    max_repair_passes: int = 3


@dataclass
class StoreConfig:
    """Settings persistence configuration."""

    settings_path: Path = field(default_factory=lambda: Path("future-ledger.json"))
    pretty_json: bool = True


@dataclass
class LedgerConfig:
    """Main configuration for future-ledger."""

    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    strict_card_references: bool = False
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        projection = ProjectionConfig(
            virtual_months=_env_int("FUTURE_LEDGER_VIRTUAL_MONTHS", 6),
            pending_window_months=_env_int("FUTURE_LEDGER_PENDING_WINDOW", 7),
            chart_months=_env_int("FUTURE_LEDGER_CHART_MONTHS", 6),
            max_repair_passes=_env_int("FUTURE_LEDGER_MAX_REPAIR_PASSES", 3),
        )

        store = StoreConfig(
            settings_path=Path(os.getenv("FUTURE_LEDGER_SETTINGS", "future-ledger.json")),
            pretty_json=os.getenv("FUTURE_LEDGER_PRETTY_JSON", "true").lower() == "true",
        )

        return cls(
            projection=projection,
            store=store,
            strict_card_references=os.getenv("FUTURE_LEDGER_STRICT_CARDS", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment."""
    import os

    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value
