"""In-memory favorites store, intended for tests and one-off runs."""

import threading
from typing import Iterable, List, Optional

from nightsky.domain import Place
from nightsky.favorites_store.base import FavoritesStore

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="favorites_store/in_memory")


class InMemoryFavoritesStore(FavoritesStore):
    """Thread-safe list of places kept for the lifetime of the object."""

    def __init__(self, places: Iterable[Place] = ()) -> None:
        self._places: List[Place] = []
        self._lock = threading.Lock()
        for place in places:
            self.add(place)

    def _index_of(self, place: Place) -> int | None:
        for i, fav in enumerate(self._places):
            if fav.same_place(place):
                return i
        return None

    def list(self) -> List[Place]:
        with self._lock:
            return list(self._places)

    def get(self, name: str) -> Optional[Place]:
        wanted = name.strip().casefold()
        with self._lock:
            return next((p for p in self._places if p.name.casefold() == wanted), None)

    def add(self, place: Place) -> bool:
        with self._lock:
            if self._index_of(place) is not None:
                return False
            self._places.append(place)
        logger.debug("Added favorite %s", place.name)
        return True

    def remove(self, place: Place) -> bool:
        with self._lock:
            idx = self._index_of(place)
            if idx is None:
                return False
            del self._places[idx]
        logger.debug("Removed favorite %s", place.name)
        return True

    def is_favorite(self, place: Place) -> bool:
        with self._lock:
            return self._index_of(place) is not None

    def clear(self) -> None:
        with self._lock:
            self._places.clear()
