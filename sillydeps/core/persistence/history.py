"""
Scan history: append-only log of audit summaries.

Every saved scan appends one line to an NDJSON (newline-delimited JSON)
file, by default ``.sillydeps/history.ndjson`` under the project root.
Entries are never modified; ``clear()`` removes the whole file.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_DIR = ".sillydeps"
DEFAULT_HISTORY_FILE = "history.ndjson"


class HistoryEntry(BaseModel):
    """Summary of one scan."""

    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    project: str = ""
    direct: int = 0
    indirect: int = 0
    category: str | None = None
    degraded: bool = False


class HistoryWriter:
    """Append-only history ledger.

    Each call to write() appends a single JSON line. The file and its
    directory are created on first write.
    """

    def __init__(self, path: Path | None = None, project_root: Path | None = None):
        if path is not None:
            self._path = path
        elif project_root is not None:
            self._path = project_root / DEFAULT_HISTORY_DIR / DEFAULT_HISTORY_FILE
        else:
            self._path = Path(DEFAULT_HISTORY_DIR) / DEFAULT_HISTORY_FILE

    @property
    def path(self) -> Path:
        return self._path

    def write(self, entry: HistoryEntry) -> bool:
        """Append an entry. Returns False (and logs) if the write failed."""
        data = entry.model_dump(mode="json")
        line = json.dumps(data, ensure_ascii=False) + "\n"

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            logger.error("Failed to write history entry to %s: %s", self._path, e)
            return False

        logger.debug("History entry written: %s", entry.timestamp)
        return True

    def read_all(self) -> list[HistoryEntry]:
        """Read all entries, oldest first. Corrupt lines are skipped."""
        if not self._path.is_file():
            return []

        entries = []
        try:
            with self._path.open("r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        entries.append(HistoryEntry.model_validate_json(line))
                    except ValueError as e:
                        logger.warning("Skipping corrupt history entry at line %d: %s", line_num, e)
        except OSError as e:
            logger.error("Failed to read history %s: %s", self._path, e)

        return entries

    def read_recent(self, n: int = 20) -> list[HistoryEntry]:
        """Read the most recent N entries."""
        if n <= 0:
            return []
        return self.read_all()[-n:]

    def entry_count(self) -> int:
        """Count entries without parsing them."""
        if not self._path.is_file():
            return 0
        try:
            with self._path.open("r", encoding="utf-8") as f:
                return sum(1 for line in f if line.strip())
        except OSError:
            return 0

    def clear(self) -> None:
        """Delete the history file."""
        self._path.unlink(missing_ok=True)
        logger.info("History cleared: %s", self._path)
