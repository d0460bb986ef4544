"""Tests for the append-only event log."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from sprout.store.events import EventLog


class TestEventLog:
    def test_appends_timestamped_lines(self, tmp_path: Path):
        path = tmp_path / "log.txt"
        with EventLog(path) as events:
            events.record("Script started.")
            events.record("100% done - really")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert re.match(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} - Script started\.$", lines[0])
        assert lines[1].endswith(" - 100% done - really")

    def test_appends_to_existing_log(self, tmp_path: Path):
        path = tmp_path / "log.txt"
        path.write_text("2024-01-01 00:00:00 - earlier\n", encoding="utf-8")
        with EventLog(path) as events:
            events.record("later")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "2024-01-01 00:00:00 - earlier"
        assert lines[1].endswith(" - later")

    def test_creates_parent_directory(self, tmp_path: Path):
        path = tmp_path / "a" / "b" / "log.txt"
        with EventLog(path) as events:
            events.record("hello")
        assert path.exists()

    def test_no_file_until_first_event(self, tmp_path: Path):
        path = tmp_path / "log.txt"
        EventLog(path).close()
        assert not path.exists()

    def test_null_sink(self, tmp_path: Path):
        with EventLog(None) as events:
            events.record("dropped")
        assert list(tmp_path.iterdir()) == []

    def test_separate_sinks(self, tmp_path: Path):
        a, b = tmp_path / "a.txt", tmp_path / "b.txt"
        with EventLog(a) as log_a, EventLog(b) as log_b:
            log_a.record("only a")
            log_b.record("only b")
        assert "only b" not in a.read_text(encoding="utf-8")
        assert "only a" not in b.read_text(encoding="utf-8")

    def test_unwritable_path_does_not_raise(self, tmp_path: Path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        events = EventLog(blocker / "log.txt")
        with caplog.at_level(logging.WARNING, logger="sprout.store.events"):
            events.record("lost")
        events.close()
        assert "Could not write event" in caplog.text

    def test_write_failure_logged_as_warning(self, tmp_path: Path, caplog, capsys):
        class FullDisk:
            def write(self, text):
                raise OSError("No space left on device")

            def flush(self):
                pass

        path = tmp_path / "log.txt"
        events = EventLog(path)
        events.record("opened")
        real_stream = events._handler.stream
        events._handler.stream = FullDisk()
        with caplog.at_level(logging.WARNING, logger="sprout.store.events"):
            events.record("lost")
        events._handler.stream = real_stream
        events.close()
        assert "No space left on device" in caplog.text
        assert "Logging error" not in capsys.readouterr().err
        assert "lost" not in path.read_text(encoding="utf-8")
