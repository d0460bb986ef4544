"""Exceptions raised by the record store."""

from __future__ import annotations


class SproutError(Exception):
    """Base exception for all Sprout errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidNameError(SproutError):
    """A slug is not in sanitized, filesystem-safe form."""


class EmptyNameError(InvalidNameError):
    """The raw name, or what is left of it after sanitizing, is empty."""


class InvalidFieldError(SproutError):
    """A field key or value cannot be represented in a record file."""


class DuplicateNameError(SproutError):
    """The target slug already has a record file."""

    def __init__(self, message: str, slug: str) -> None:
        super().__init__(message, details={"slug": slug})
        self.slug = slug


class SameNameError(SproutError):
    """A rename would leave the slug unchanged."""

    def __init__(self, message: str, slug: str) -> None:
        super().__init__(message, details={"slug": slug})
        self.slug = slug


class StoreIOError(SproutError):
    """A filesystem operation (create, move, delete, write) failed."""


class RenameIncompleteError(StoreIOError):
    """The record file was moved but its display name could not be rewritten.

    The record now lives under ``new_slug`` while still showing the old
    display name.

    Attributes:
        old_slug: Slug the record had before the rename
        new_slug: Slug the record file now lives under
    """

    def __init__(self, message: str, old_slug: str, new_slug: str) -> None:
        super().__init__(message, details={"old_slug": old_slug, "new_slug": new_slug})
        self.old_slug = old_slug
        self.new_slug = new_slug
