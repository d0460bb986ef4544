"""Entry point: python -m sprout [menu|list]

- No args / "menu": Interactive plant record menu
- "list":           Print every record as <slug><TAB><display name>
"""

from __future__ import annotations

import logging
import sys

from sprout.config import load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _run_menu() -> None:
    """Interactive menu mode."""
    config = load_config()
    _setup_logging(config.log_level)

    from sprout.cli import MenuApp
    from sprout.store import RecordStore

    store = RecordStore(config.data_dir, log_file=config.log_file)
    try:
        MenuApp(store, date_format=config.date_format).run()
    finally:
        store.close()


def _run_list() -> None:
    config = load_config()
    _setup_logging(config.log_level)

    from sprout.store import RecordStore

    store = RecordStore(config.data_dir, log_file=config.log_file)
    try:
        for ref in store.list():
            print(f"{ref.slug}\t{ref.display_name}")
    finally:
        store.close()


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "menu"

    if cmd == "menu":
        _run_menu()
    elif cmd == "list":
        _run_list()
    else:
        print("Usage: python -m sprout [menu|list]")
        print("  menu   Interactive plant record menu (default)")
        print("  list   Print every record")
        sys.exit(1)


if __name__ == "__main__":
    main()
