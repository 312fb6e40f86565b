"""Exception classes for the search package."""

from typing import Any


class SearchError(Exception):
    """Base exception for search errors."""

    pass


class InvalidSearchModeError(SearchError, ValueError):
    """Raised when a search mode name is not recognised."""

    def __init__(self, mode: Any):
        """Initialize with the rejected mode."""
        self.mode = mode
        super().__init__(
            f"Invalid search mode: {mode!r} (expected eagle, fuzzy or greedy)"
        )


class FieldsProviderError(SearchError, TypeError):
    """Raised when a fields provider fails or yields an unusable entry."""

    def __init__(self, item: Any, message: str):
        """Initialize with the item being resolved and a message."""
        self.item = item
        super().__init__(f"Cannot resolve search fields for {item!r}: {message}")


class ConfigError(SearchError, ValueError):
    """Raised when search settings cannot be loaded or validated."""

    pass


class ItemLoadError(SearchError):
    """Raised when items cannot be read from a file."""

    def __init__(self, path: Any, message: str):
        """Initialize with file path and message."""
        self.path = path
        super().__init__(f"Failed to load items from {path}: {message}")
