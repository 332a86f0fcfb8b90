"""Custom exception hierarchy for related-content."""


class RelatedContentError(Exception):
    """Base exception for all related-content errors."""

    pass


class ConfigError(RelatedContentError):
    """Configuration-related errors."""

    pass


class CatalogError(RelatedContentError):
    """Static catalog errors (unreadable or unparseable source)."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class DatabaseError(RelatedContentError):
    """Database query errors."""

    pass
