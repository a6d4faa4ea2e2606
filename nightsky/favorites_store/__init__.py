"""Favorite-place storage backends."""

from .base import FavoritesStore
from .json_file import JsonFavoritesStore
from .memory import InMemoryFavoritesStore

__all__ = [
    "FavoritesStore",
    "InMemoryFavoritesStore",
    "JsonFavoritesStore",
]
