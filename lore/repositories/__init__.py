"""
Repository Layer.

Data access through the Supabase client: the ``profiles`` table and the
avatar storage bucket.
"""

from lore.repositories.avatar_repository import AvatarRepository
from lore.repositories.base_repository import BaseRepository
from lore.repositories.profile_repository import ProfileRepository

__all__ = [
    "AvatarRepository",
    "BaseRepository",
    "ProfileRepository",
]
