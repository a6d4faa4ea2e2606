"""Shared protocol for favorite-place storage backends."""

from typing import List, Optional, Protocol

from nightsky.domain import Place


class FavoritesStore(Protocol):
    """Protocol for favorites backends. A place is identified by name + coordinates."""
    def list(self) -> List[Place]:
        """Return favorites in insertion order."""

    def get(self, name: str) -> Optional[Place]:
        """Return the first favorite with this name (case-insensitive), or None."""

    def add(self, place: Place) -> bool:
        """Add a place; return False if it was already a favorite."""

    def remove(self, place: Place) -> bool:
        """Remove a place; return False if it was not a favorite."""

    def is_favorite(self, place: Place) -> bool:
        """Return True if the place is stored."""

    def clear(self) -> None:
        """Remove all favorites."""
