"""Record store for plant containers.

Layout:
    <data_dir>/
    ├── My-Monstera_data.txt           # One KEY=VALUE file per record
    ├── Rose_data.txt
    └── plant_tracker_log.txt          # Event log (append-only, default location)

Record files are named after the sanitized slug; the name the user typed is
kept in the ``USER_GIVEN_NAME`` field.
"""

from sprout.store.events import EventLog
from sprout.store.records import (
    DATA_FILE_SUFFIX,
    DISPLAY_NAME_KEY,
    RecordRef,
    RecordStore,
    sanitize_name,
)

__all__ = [
    "DATA_FILE_SUFFIX",
    "DISPLAY_NAME_KEY",
    "EventLog",
    "RecordRef",
    "RecordStore",
    "sanitize_name",
]
