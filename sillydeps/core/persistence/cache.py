"""
Last-result cache: atomic snapshot of the latest scan result.

Stored as JSON in the system temp directory (``silly-cache.json``)
unless the settings point elsewhere. Writes go to a temp file in the
same directory and are then renamed over the target.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CACHE_FILE = "silly-cache.json"


def default_cache_path() -> Path:
    """Cache location in the system temp directory."""
    return Path(tempfile.gettempdir()) / DEFAULT_CACHE_FILE


def load_cached_result(path: Path) -> dict[str, Any] | None:
    """Load the cached result dict.

    Returns:
        The cached data, or None if the file is missing or corrupt.
    """
    if not path.is_file():
        logger.info("No cached result at %s", path)
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Corrupt cache file %s: %s; ignoring", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Unexpected cache content in %s; ignoring", path)
        return None
    return data


def save_cached_result(data: dict[str, Any], path: Path) -> None:
    """Save a result dict (atomic write).

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=".silly-cache_",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        tmp.replace(path)
        logger.debug("Result cached to %s", path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
