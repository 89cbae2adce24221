"""Temp-value store shared between tests.

Tests run in file order and hand data forward through a small JSON file:
the project test saves ``projectName``, the list test reads it and saves
``lastCreatedList``, the search test reads that, and so on.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from julius_e2e.exceptions import TempValueMissingError
from julius_e2e.settings import get_settings

logger = logging.getLogger(__name__)

PROJECT_NAME_KEY = "projectName"
LAST_LIST_KEY = "lastCreatedList"
LAST_CAMPAIGN_KEY = "lastCampaignName"
LAST_GROUP_KEY = "lastCreatedGroup"
LAST_TAG_KEY = "lastCreatedTag"


class TempStore:
    """Read-modify-write access to a JSON object file.

    Args:
        path: The JSON file. Created (with parents) on first save.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save(self, key: str, value: Any) -> None:
        """Store *value* under *key*, keeping every other key."""
        data = self._read()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Error saving temp value %s to %s: %s", key, self.path, exc)
            raise
        logger.info("Saved %s=%r to temp data", key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or *default* when absent or unreadable."""
        return self._read().get(key, default)

    def require(self, key: str) -> Any:
        """Return the stored value or raise ``TempValueMissingError``."""
        value = self.get(key)
        if value is None or value == "":
            raise TempValueMissingError(key)
        return value

    def all(self) -> dict[str, Any]:
        return self._read()

    def clear(self) -> None:
        """Remove the file; a missing file is already clear."""
        self.path.unlink(missing_ok=True)
        logger.info("Cleared temp data at %s", self.path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Error reading temp data from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.error("Temp data in %s is not a JSON object, ignoring it", self.path)
            return {}
        return data


def get_temp_store() -> TempStore:
    """Store at the configured ``data.temp_file`` path."""
    return TempStore(get_settings().data.temp_file)
