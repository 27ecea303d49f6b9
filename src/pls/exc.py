"""Exception hierarchy for pls."""

from __future__ import annotations


class PlsError(Exception):
    """Base exception for pls."""


class ListingError(PlsError):
    """A path could not be listed (missing, or its directory is unreadable)."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"{path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class ConfigError(PlsError):
    pass
