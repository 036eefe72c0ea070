"""
core/storage.py — JSON save file for DotQuest.

All persistent data lives in one JSON document split into named
sections ("progress", "achievements", "leaderboard"). Each service owns
one section and rewrites only that section when it saves.

Writes go to a temporary file in the same directory followed by
os.replace(), so a crash mid-write leaves the previous save intact.

A missing file is a fresh install. An unreadable or corrupt file is
logged and treated as empty; the game must never refuse to start
because of its save data.
"""

from __future__ import annotations
import json
import logging
import os
import tempfile
from typing import Any

logger = logging.getLogger(__name__)


class JsonStore:
    """Section-based JSON document on disk.

    Attributes:
        path: Absolute path of the save file.
    """

    def __init__(self, path: str) -> None:
        self.path = os.path.abspath(path)

    def _read(self) -> dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to read save file %s: %s", self.path, e, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.error("Save file %s is not a JSON object, ignoring it", self.path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> bool:
        directory = os.path.dirname(self.path)
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".save-", suffix=".json", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error("Failed to write save file %s: %s", self.path, e, exc_info=True)
            return False
        return True

    def load_section(self, name: str) -> Any:
        """Return the stored value of section name, or None if absent."""
        return self._read().get(name)

    def save_section(self, name: str, value: Any) -> bool:
        """Replace section name with value and write the file.

        Returns:
            True on success. Failures are logged, not raised.
        """
        data = self._read()
        data[name] = value
        ok = self._write(data)
        if ok:
            logger.debug("Saved section '%s' to %s", name, self.path)
        return ok

    def clear(self) -> bool:
        """Wipe every section, leaving an empty document."""
        logger.info("Clearing all save data in %s", self.path)
        return self._write({})
