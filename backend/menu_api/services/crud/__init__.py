"""
Data access layer.
"""

from .repository import BaseRepository, RestaurantScopedRepository

__all__ = ["BaseRepository", "RestaurantScopedRepository"]
