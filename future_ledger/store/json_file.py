"""JSON file persistence for the settings aggregate."""

import json
import os
from pathlib import Path

from future_ledger.exceptions import PersistenceError
from future_ledger.logging import get_logger
from future_ledger.store.serialization import settings_from_dict, settings_to_dict
from future_ledger.store.settings import Settings

logger = get_logger(__name__)


class JsonSettingsStore:
    """Load and save ``Settings`` as a single JSON document."""

    def __init__(self, path: str | Path, pretty: bool = True) -> None:
        """Initialize JSON settings store.

        Parameters
        ----------
        path : str | Path
            File holding the settings document. Missing files load as empty settings.
        pretty : bool
            Pretty-print JSON output.
        """
        self.path = Path(path)
        self.pretty = pretty
        self.save_count = 0

    def load(self) -> Settings:
        """Read settings from disk."""
        if not self.path.exists():
            logger.info("No settings at %s, starting empty", self.path)
            return Settings()

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read settings from {self.path}: {exc}") from exc

        settings = settings_from_dict(data)
        logger.debug("Loaded settings from %s: %s", self.path, settings.summary())
        return settings

    def save(self, settings: Settings) -> None:
        """Write settings to disk, replacing the previous file atomically."""
        data = settings_to_dict(settings)
        tmp_path = self.path.with_name(self.path.name + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise PersistenceError(f"Cannot write settings to {self.path}: {exc}") from exc

        settings.sanitized_dates = 0
        self.save_count += 1
        logger.debug("Saved settings to %s", self.path)
