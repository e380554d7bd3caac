"""Recent search queries, most recent first."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class SearchHistory:
    def __init__(self, max_size: int = 10, path: str | Path | None = None):
        self._max_size = max_size
        self._path = Path(path) if path else None
        self._queries: list[str] = self._load()

    def _load(self) -> list[str]:
        if not self._path or not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Error retrieving search history from {self._path}: {e}")
            return []
        if not isinstance(data, list):
            return []
        return [q for q in data if isinstance(q, str)][: self._max_size]

    def _save(self) -> None:
        if not self._path:
            return
        try:
            self._path.write_text(json.dumps(self._queries), encoding="utf-8")
        except OSError as e:
            logger.error(f"Error saving search history to {self._path}: {e}")

    def add(self, query: str) -> None:
        query = query.strip()
        if not query:
            return
        self._queries = [query] + [q for q in self._queries if q != query]
        del self._queries[self._max_size:]
        self._save()

    def items(self) -> list[str]:
        return list(self._queries)

    def clear(self) -> None:
        self._queries = []
        self._save()

    def __len__(self) -> int:
        return len(self._queries)
