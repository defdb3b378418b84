from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

BEST_SCORE_KEY = "bestScore"


class PersistenceUnavailable(RuntimeError):
    pass


class ScoreStore(Protocol):
    def load(self, key: str) -> int | None: ...

    def save(self, key: str, value: int) -> None: ...


class MemoryScoreStore:
    def __init__(self, initial: dict[str, int] | None = None) -> None:
        self.values: dict[str, int] = dict(initial or {})

    def load(self, key: str) -> int | None:
        return self.values.get(key)

    def save(self, key: str, value: int) -> None:
        self.values[key] = value


class JsonScoreStore:
    """Flat key -> int map kept in a small JSON file under userdata/."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def _read(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceUnavailable(f"Cannot read {self._path}: {e}") from e
        if not isinstance(raw, dict):
            raise PersistenceUnavailable(f"{self._path} must hold a JSON object")
        return raw

    def load(self, key: str) -> int | None:
        v = self._read().get(key)
        # bool is an int subclass; a stray true/false is not a score
        if isinstance(v, int) and not isinstance(v, bool):
            return v
        return None

    def save(self, key: str, value: int) -> None:
        try:
            data = self._read()
        except PersistenceUnavailable:
            # Unreadable file gets replaced rather than blocking the write
            data = {}
        data[key] = int(value)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            raise PersistenceUnavailable(f"Cannot write {self._path}: {e}") from e


def load_best_score(store: ScoreStore, key: str = BEST_SCORE_KEY) -> int | None:
    try:
        return store.load(key)
    except PersistenceUnavailable as e:
        logger.warning("Best score unavailable, starting without one: %s", e)
        return None


def save_best_score(store: ScoreStore, value: int, key: str = BEST_SCORE_KEY) -> bool:
    """Persist the best score. Returns False when the store refused the write."""
    try:
        store.save(key, value)
    except PersistenceUnavailable as e:
        logger.warning("Could not persist best score %s, keeping it in memory: %s", value, e)
        return False
    return True
