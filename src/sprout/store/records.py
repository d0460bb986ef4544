"""Record store: maps container names to KEY=VALUE files in one flat directory."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import NamedTuple

from sprout.exceptions import (
    DuplicateNameError,
    EmptyNameError,
    InvalidFieldError,
    InvalidNameError,
    RenameIncompleteError,
    SameNameError,
    StoreIOError,
)
from sprout.store import kvfile
from sprout.store.events import EventLog

logger = logging.getLogger(__name__)

DATA_FILE_SUFFIX = "_data.txt"
DISPLAY_NAME_KEY = "USER_GIVEN_NAME"

_DISALLOWED = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_name(raw: str) -> str:
    """Spaces to hyphens, then drop everything outside [A-Za-z0-9_-].

    May return an empty string, which callers must reject.
    """
    return _DISALLOWED.sub("", raw.replace(" ", "-"))


class RecordRef(NamedTuple):
    slug: str
    display_name: str


class RecordStore:
    """Create, list, rename and delete plant records under ``root``.

    Each record is ``<root>/<slug>_data.txt``; its display name lives in the
    ``USER_GIVEN_NAME`` field. Every mutation appends a line to the event log.
    """

    def __init__(self, root: Path, log_file: Path | None = None) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)
        self.events = EventLog(log_file)

    # ── Paths ─────────────────────────────────────────────────

    def path_for(self, slug: str) -> Path:
        """Return the record file path for ``slug``."""
        if not slug:
            raise EmptyNameError("Slug cannot be empty")
        if sanitize_name(slug) != slug:
            raise InvalidNameError(f"Not a valid slug: {slug!r}", details={"slug": slug})
        return self.root / f"{slug}{DATA_FILE_SUFFIX}"

    def exists(self, slug: str) -> bool:
        return self.path_for(slug).is_file()

    # ── Reads ─────────────────────────────────────────────────

    def list(self) -> list[RecordRef]:
        """All records, sorted by slug."""
        refs: list[RecordRef] = []
        for path in self.root.glob(f"*{DATA_FILE_SUFFIX}"):
            if not path.is_file():
                continue
            slug = path.name[: -len(DATA_FILE_SUFFIX)]
            if not slug:
                continue
            if sanitize_name(slug) != slug:
                logger.warning("Skipping %s: not a valid record file name", path.name)
                continue
            name = kvfile.read_value(path, DISPLAY_NAME_KEY)
            refs.append(RecordRef(slug, name or slug))
        refs.sort(key=lambda ref: ref.slug)
        return refs

    def display_name(self, slug: str) -> str:
        """USER_GIVEN_NAME, falling back to the slug for legacy files."""
        return self.get_field(slug, DISPLAY_NAME_KEY) or slug

    def get_field(self, slug: str, key: str) -> str | None:
        return kvfile.read_value(self.path_for(slug), key)

    def fields(self, slug: str) -> dict[str, str] | None:
        """Every field of the record, or None if it has no file."""
        return kvfile.read_all(self.path_for(slug))

    # ── Mutations ─────────────────────────────────────────────

    def create(self, raw_name: str) -> str:
        """Create an empty record named ``raw_name`` and return its slug."""
        slug = self._slug_from_raw(raw_name)
        path = self.path_for(slug)
        if path.exists():
            raise DuplicateNameError(
                f"A record file named '{path.name}' already exists", slug=slug
            )

        try:
            with path.open("x", encoding="utf-8"):
                pass
        except FileExistsError:
            raise DuplicateNameError(
                f"A record file named '{path.name}' already exists", slug=slug
            ) from None
        except OSError as e:
            self.events.record(f"Error: Failed to create data file: {path}")
            raise StoreIOError(f"Could not create {path}: {e}") from e

        try:
            self._write(path, DISPLAY_NAME_KEY, raw_name)
        except StoreIOError:
            path.unlink(missing_ok=True)
            raise
        self.events.record(
            f"Created new plant container data file: {path} for name: {raw_name}"
        )
        logger.info("Created record %s (%s)", slug, raw_name)
        return slug

    def set_field(self, slug: str, key: str, value: str) -> None:
        """Set one field, creating the record file if it does not exist."""
        path = self.path_for(slug)
        self._write(path, key, value)
        if value:
            self.events.record(f"Plant data: {path} - {key} changed to '{value}'")
        else:
            self.events.record(f"Plant data: {path} - {key} cleared")
        logger.info("Set %s on %s", key, slug)

    def rename(self, old_slug: str, new_raw_name: str) -> str:
        """Move a record to the slug of ``new_raw_name`` and return it.

        The move and the display-name rewrite are two steps. If only the move
        succeeds, RenameIncompleteError reports the new slug.
        """
        new_slug = self._slug_from_raw(new_raw_name)
        old_path = self.path_for(old_slug)
        if new_slug == old_slug:
            raise SameNameError("The new name is the same as the old name", slug=old_slug)

        new_path = self.path_for(new_slug)
        if new_path.exists():
            raise DuplicateNameError(
                f"A record file named '{new_path.name}' already exists", slug=new_slug
            )

        old_name = self.display_name(old_slug)
        try:
            os.rename(old_path, new_path)
        except OSError as e:
            self.events.record(f"Error: Failed to rename '{old_path}' to '{new_path}'.")
            logger.warning("Rename %s -> %s failed: %s", old_slug, new_slug, e)
            raise StoreIOError(f"Could not rename {old_path} to {new_path}: {e}") from e

        try:
            self._write(new_path, DISPLAY_NAME_KEY, new_raw_name)
        except StoreIOError as e:
            self.events.record(
                f"Error: Renamed '{old_path}' to '{new_path}' but could not update "
                f"{DISPLAY_NAME_KEY} to '{new_raw_name}'."
            )
            raise RenameIncompleteError(
                f"Record moved to '{new_slug}' but its display name is still '{old_name}': {e}",
                old_slug=old_slug,
                new_slug=new_slug,
            ) from e

        self.events.record(
            f"Renamed plant container from '{old_slug}' (user name: '{old_name}') "
            f"to '{new_slug}' (user name: '{new_raw_name}'). "
            f"Old file: {old_path}, New file: {new_path}"
        )
        logger.info("Renamed record %s -> %s", old_slug, new_slug)
        return new_slug

    def delete(self, slug: str) -> None:
        """Remove the record file. There is no backup."""
        path = self.path_for(slug)
        name = self.display_name(slug)
        try:
            path.unlink()
        except OSError as e:
            self.events.record(f"Error: Failed to delete file: {path}")
            logger.warning("Delete %s failed: %s", slug, e)
            raise StoreIOError(f"Could not delete {path}: {e}") from e
        self.events.record(f"Deleted plant container: '{name}' (File: {path})")
        logger.info("Deleted record %s", slug)

    def close(self) -> None:
        self.events.close()

    # ── Internal ──────────────────────────────────────────────

    def _slug_from_raw(self, raw_name: str) -> str:
        if not raw_name:
            raise EmptyNameError("Name cannot be empty")
        if "\n" in raw_name or "\r" in raw_name:
            raise InvalidFieldError(f"Name cannot contain a line break: {raw_name!r}")
        slug = sanitize_name(raw_name)
        if not slug:
            raise EmptyNameError(
                f"Invalid name after sanitization: {raw_name!r}. "
                "Use letters, numbers, spaces, or hyphens."
            )
        return slug

    def _write(self, path: Path, key: str, value: str) -> None:
        try:
            kvfile.write_value(path, key, value)
        except OSError as e:
            self.events.record(f"Error: Failed to write {key} to {path}")
            logger.warning("Write %s to %s failed: %s", key, path, e)
            raise StoreIOError(f"Could not write {key} to {path}: {e}") from e
