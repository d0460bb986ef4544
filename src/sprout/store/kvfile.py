"""KEY=VALUE record files.

One pair per line, UTF-8, lines kept sorted by full text. A value is
everything after the first ``=`` on its line, so values may contain ``=``
but never a line break. When a hand-edited file repeats a key, the first
line in file order wins; ``write_value`` always removes every earlier line
for the key, so files it produces never repeat one.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from sprout.exceptions import InvalidFieldError

logger = logging.getLogger(__name__)

_NEW_FILE_MODE = 0o644


def validate_key(key: str) -> None:
    if not key:
        raise InvalidFieldError("Field key cannot be empty")
    if "=" in key:
        raise InvalidFieldError(f"Field key cannot contain '=': {key!r}")
    if "\n" in key or "\r" in key:
        raise InvalidFieldError(f"Field key cannot contain a line break: {key!r}")


def validate_value(value: str) -> None:
    if "\n" in value or "\r" in value:
        raise InvalidFieldError(f"Field value cannot contain a line break: {value!r}")


def _read_lines(path: Path) -> list[str] | None:
    """Return the file's lines, or None if it does not exist.

    Bytes that are not valid UTF-8 decode to U+FFFD instead of failing.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return None
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def read_value(path: Path, key: str) -> str | None:
    """Return the value stored for ``key``, or None if absent.

    A missing file reads as an empty record.
    """
    lines = _read_lines(path)
    if lines is None:
        return None
    prefix = f"{key}="
    for line in lines:
        if line.startswith(prefix):
            return line[len(prefix):]
    return None


def read_all(path: Path) -> dict[str, str] | None:
    """Parse every KEY=VALUE line. Returns None if the file does not exist."""
    lines = _read_lines(path)
    if lines is None:
        return None
    fields: dict[str, str] = {}
    for line in lines:
        key, sep, value = line.partition("=")
        if not sep or not key:
            continue
        fields.setdefault(key, value)
    return fields


def write_value(path: Path, key: str, value: str) -> None:
    """Set ``key`` to ``value``, replacing every existing line for the key.

    The file is created if missing and rewritten atomically.
    """
    validate_key(key)
    validate_value(value)

    prefix = f"{key}="
    lines = [
        line for line in (_read_lines(path) or []) if line and not line.startswith(prefix)
    ]
    lines.append(f"{key}={value}")
    lines.sort()
    _atomic_write_text(path, "\n".join(lines) + "\n")


def _atomic_write_text(path: Path, content: str) -> None:
    """Write to a temp file in the target's directory, then os.replace it in."""
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = _NEW_FILE_MODE

    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            logger.debug("Could not remove temp file %s", tmp_path)
        raise
