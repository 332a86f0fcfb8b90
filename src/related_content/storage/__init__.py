"""Database storage module."""

from related_content.storage.repository import PostRepository, SqlitePostRepository

__all__ = ["PostRepository", "SqlitePostRepository"]
