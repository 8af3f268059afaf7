"""Bounded scan history for LinkGuard.

Keeps the most recent results first, at most one entry per URL. When a file
path is configured the history is persisted as JSON, written atomically so a
crash mid-write never corrupts the previous copy.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from linkguard.models import AnalysisResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 5


class HistoryStore:
    """Most-recent-first, URL-deduplicated list of past results."""

    def __init__(self, max_items: int = DEFAULT_MAX_ITEMS, path: str | Path | None = None) -> None:
        """Initialize an empty store.

        Args:
            max_items: Maximum number of results retained.
            path: Optional JSON file used by ``load`` and ``save``.
        """
        if max_items < 1:
            raise ValueError(f"max_items must be at least 1, got {max_items}")
        self.max_items = max_items
        self.path = Path(path) if path else None
        self._items: list[AnalysisResult] = []

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> list[AnalysisResult]:
        """Return a copy of the stored results, newest first."""
        return list(self._items)

    def add(self, result: AnalysisResult) -> None:
        """Insert a result at the front, dropping older scans of the same URL."""
        self._items = [result] + [r for r in self._items if r.url != result.url]
        del self._items[self.max_items:]

    def clear(self) -> None:
        self._items = []

    def load(self) -> None:
        """Replace the in-memory history with the contents of ``path``.

        Missing files leave the store empty. Corrupt files and entries are
        logged and skipped.
        """
        self._items = []
        if self.path is None or not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load scan history from %s: %s", self.path, exc)
            return
        if not isinstance(data, list):
            logger.warning("Ignoring scan history in %s: expected a list", self.path)
            return

        for entry in data:
            try:
                result = AnalysisResult.from_dict(entry)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping corrupt history entry: %s", exc)
                continue
            if len(self._items) >= self.max_items:
                break
            if all(r.url != result.url for r in self._items):
                self._items.append(result)

        logger.debug("Loaded %d history item(s) from %s", len(self._items), self.path)

    def save(self) -> None:
        """Persist the history to ``path`` atomically.

        Writes to a temporary file in the same directory and renames it over
        the target. Failures are logged, never raised.
        """
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps([r.to_dict() for r in self._items], ensure_ascii=False, indent=2)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), suffix=".tmp", prefix="history_",
            )
            closed = False
            try:
                os.write(fd, payload.encode("utf-8"))
                os.close(fd)
                closed = True
                os.replace(tmp_path, str(self.path))
            except Exception:
                if not closed:
                    os.close(fd)
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except Exception as exc:
            logger.warning("Failed to save scan history to %s: %s", self.path, exc)
