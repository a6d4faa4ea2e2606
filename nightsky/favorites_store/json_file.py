"""Favorites persisted as a JSON array of places."""

import json
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from nightsky.domain import Place
from nightsky.favorites_store.base import FavoritesStore
from nightsky.favorites_store.memory import InMemoryFavoritesStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="favorites_store/json_file")

_PLACES = TypeAdapter(List[Place])


class JsonFavoritesStore(FavoritesStore):
    """
    File-backed store. The file is read once on creation and rewritten after
    every change; a missing file means no favorites yet.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()
        self._memory = InMemoryFavoritesStore(self._load())

    def _load(self) -> List[Place]:
        if not self.path.exists():
            logger.debug("No favorites file at %s", self.path)
            return []
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return []
        try:
            return _PLACES.validate_json(raw)
        except ValidationError as exc:
            raise ValueError(f"Invalid favorites file {self.path}: {exc}") from exc

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = [p.model_dump() for p in self._memory.list()]
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.debug("Saved %d favorites to %s", len(data), self.path)

    def list(self) -> List[Place]:
        return self._memory.list()

    def get(self, name: str) -> Optional[Place]:
        return self._memory.get(name)

    def add(self, place: Place) -> bool:
        added = self._memory.add(place)
        if added:
            self._save()
        return added

    def remove(self, place: Place) -> bool:
        removed = self._memory.remove(place)
        if removed:
            self._save()
        return removed

    def is_favorite(self, place: Place) -> bool:
        return self._memory.is_favorite(place)

    def clear(self) -> None:
        self._memory.clear()
        self._save()
