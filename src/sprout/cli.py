"""Interactive terminal menu over the record store.

All prompting, confirmation and formatting happens here; records are only
ever touched through ``RecordStore``.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING, TextIO

from sprout.exceptions import (
    DuplicateNameError,
    EmptyNameError,
    InvalidFieldError,
    RenameIncompleteError,
    SameNameError,
    StoreIOError,
)
from sprout.fields import DEVELOPMENT_STAGE_KEY, DEVELOPMENT_STAGES, SECTIONS, FieldSpec
from sprout.store import DATA_FILE_SUFFIX, DISPLAY_NAME_KEY

if TYPE_CHECKING:
    from sprout.store import RecordStore

_CLEAR_CHOICE = "Clear Value"


class MenuApp:
    """Numbered-menu REPL: view, update, add, rename and delete records."""

    def __init__(
        self,
        store: RecordStore,
        date_format: str = "%Y-%m-%d",
        input_fn: Callable[[str], str] | None = None,
        out: TextIO | None = None,
        today: date | None = None,
    ) -> None:
        self.store = store
        self.date_format = date_format
        self._input = input_fn or input
        self._out = out
        self._today = today

    # ── Main loop ─────────────────────────────────────────────

    def run(self) -> None:
        self.store.events.record(f"Script started. Data directory: {self.store.root}")
        options: list[tuple[str, Callable[[], object]]] = [
            ("View Data for a Plant Container", self._view_selected),
            ("Update Data for a Plant Container", self._update_selected),
            ("Add New Plant Container", self.add_record),
            ("Rename Plant Container", self.rename_record),
            ("Delete Plant Container", self.delete_record),
        ]
        try:
            while True:
                self._say()
                self._say("=== Plant Observation Script ===")
                self._say("Please choose an option:")
                for i, (label, _) in enumerate(options, start=1):
                    self._say(f"{i}) {label}")
                self._say("0) Exit")

                choice = self._input(f"Enter your choice (0-{len(options)}): ").strip()
                if choice == "0":
                    self._say("Exiting Plant Observation Script.")
                    break
                if choice.isdecimal() and 1 <= int(choice) <= len(options):
                    options[int(choice) - 1][1]()
                else:
                    self._say(f"Invalid option '{choice}'. Please select a number from the list.")
        except (EOFError, KeyboardInterrupt):
            self._say("\nBye!")
        finally:
            self.store.events.record("Script finished.")

    def _view_selected(self) -> None:
        slug = self.select_record("Which plant container do you want to view?")
        if slug is None:
            self._say("View operation cancelled or no plant selected.")
            return
        self.view_record(slug)

    def _update_selected(self) -> None:
        slug = self.select_record("Which plant container do you want to update?")
        if slug is None:
            self._say("Update operation cancelled or no plant selected.")
            return
        self.update_record(slug)

    # ── Selection ─────────────────────────────────────────────

    def select_record(self, prompt: str) -> str | None:
        """Pick a record from a numbered list. Returns its slug, or None on cancel."""
        refs = self.store.list()
        if not refs:
            self._say(f"No plant data files found in {self.store.root}.")
            self._say("Use 'Add New Plant Container' to create one.")
            return None

        self._say(prompt)
        for i, ref in enumerate(refs, start=1):
            self._say(f"{i}) {ref.display_name} (File: {ref.slug})")
        self._say("0) Cancel")

        while True:
            raw = self._input("Enter number for plant container (0 to cancel): ").strip()
            if raw == "0":
                return None
            if raw.isdecimal() and 1 <= int(raw) <= len(refs):
                return refs[int(raw) - 1].slug
            self._say("Invalid selection. Please enter a number from the list.")

    # ── View ──────────────────────────────────────────────────

    def view_record(self, slug: str) -> None:
        name = self.store.display_name(slug)
        fields = self.store.fields(slug)

        self._say()
        self._say(f"--- Data for Plant Container: {name} ---")
        if fields is None:
            self._say(
                f"No data file found for {name}. "
                "Use 'Update Data' or 'Add New Plant' to create it."
            )
        else:
            shown = {k: v for k, v in fields.items() if k != DISPLAY_NAME_KEY}
            if not shown:
                self._say(f"No data recorded for {name} yet.")
            for key in sorted(shown):
                self._say(f"  {key}: {shown[key]}")
        self._say("-------------------------------------")
        self.store.events.record(
            f"Viewed data for plant container: {name} (file: {self.store.path_for(slug)})"
        )

    # ── Update ────────────────────────────────────────────────

    def update_record(self, slug: str) -> None:
        """Walk every catalog field; Enter keeps the value shown in brackets."""
        name = self.store.display_name(slug)
        self._say()
        self._say(f"--- Updating Data for: {name} ---")
        self._say(f"Data file: {self.store.path_for(slug)}")
        self._say("Press Enter to keep the current value (shown in brackets).")

        for section in SECTIONS:
            self._say()
            self._say(f"--- {section.title} ---")
            if section.note:
                self._say(section.note)
            for spec in section.fields:
                self._prompt_field(slug, spec)
            if section.with_stage:
                self._prompt_stage(slug)
            self._say(f"--- End {section.title} ---")

        self._say()
        self._say(f"--- Data for {name} Updated ---")

    def _prompt_field(self, slug: str, spec: FieldSpec) -> None:
        existing = self.store.get_field(slug, spec.key)
        default = existing or spec.default(self.date_format, self._today)
        label = f"{spec.label} ({self.date_format})" if spec.dated else spec.label

        value = self._input(f"{label} [{default}]: ") or default
        if existing is not None and value == existing:
            return
        self._set(slug, spec.key, value)

    def _prompt_stage(self, slug: str) -> None:
        current = self.store.get_field(slug, DEVELOPMENT_STAGE_KEY) or ""
        choices = [*DEVELOPMENT_STAGES, _CLEAR_CHOICE]
        self._say()
        self._say(f"Select Development Stage (current: '{current}'):")
        for i, stage in enumerate(choices, start=1):
            self._say(f"{i}) {stage}")

        while True:
            raw = self._input("Enter number for stage: ").strip()
            if raw.isdecimal() and 1 <= int(raw) <= len(choices):
                break
            self._say("Invalid selection. Please enter a number from the list.")

        stage = choices[int(raw) - 1]
        self._set(slug, DEVELOPMENT_STAGE_KEY, "" if stage == _CLEAR_CHOICE else stage)

    def _set(self, slug: str, key: str, value: str) -> None:
        try:
            self.store.set_field(slug, key, value)
        except (InvalidFieldError, StoreIOError) as e:
            self._say(f"Error: could not save {key}: {e.message}")
            return
        if value:
            self._say(f"  {key} set to: '{value}'")
        else:
            self._say(f"  {key} cleared.")

    # ── Add / rename / delete ─────────────────────────────────

    def add_record(self) -> str | None:
        self._say()
        self._say("--- Add New Plant Container ---")
        while True:
            raw = self._input(
                "Enter a name for the new plant container "
                "(e.g., 'Monstera Window Pot', 'Test Tube Alpha'): "
            )
            if not raw:
                self._say("Container name cannot be empty. Please try again.")
                continue
            try:
                slug = self.store.create(raw)
                break
            except (EmptyNameError, InvalidFieldError):
                self._say(
                    "Invalid container name after sanitization. "
                    "Please use letters, numbers, spaces, or hyphens."
                )
            except DuplicateNameError as e:
                self._say(
                    f"A plant container data file named '{e.slug}{DATA_FILE_SUFFIX}' already exists."
                )
                if not self._confirm("Do you want to try a different name? (y/N): "):
                    self._say("Add new plant container cancelled.")
                    return None
            except StoreIOError as e:
                self._say(f"Error: {e.message}")
                return None

        self._say(
            f"Successfully created data file for '{raw}' (filename: {slug}{DATA_FILE_SUFFIX})."
        )
        answer = self._input(f"Do you want to add initial data for '{raw}' now? (Y/n): ")
        if answer.strip().lower() != "n":
            self.update_record(slug)
        return slug

    def rename_record(self) -> str | None:
        self._say()
        self._say("--- Rename Plant Container ---")
        old_slug = self.select_record("Which plant container do you want to rename?")
        if old_slug is None:
            self._say("Rename operation cancelled or no plant selected.")
            return None

        old_name = self.store.display_name(old_slug)
        self._say(f"Selected container to rename: {old_name} (File: {old_slug}{DATA_FILE_SUFFIX})")
        while True:
            raw = self._input("Enter the new name for this plant container: ")
            if not raw:
                self._say("New container name cannot be empty. Please try again.")
                continue
            try:
                new_slug = self.store.rename(old_slug, raw)
                break
            except (EmptyNameError, InvalidFieldError):
                self._say(
                    "Invalid new container name after sanitization. "
                    "Please use letters, numbers, spaces, or hyphens."
                )
            except SameNameError:
                self._say("The new name is the same as the old name. No changes made.")
                return None
            except DuplicateNameError as e:
                self._say(
                    f"A plant container data file named '{e.slug}{DATA_FILE_SUFFIX}' already exists."
                )
                if not self._confirm("Do you want to try a different name? (y/N): "):
                    self._say("Rename operation cancelled.")
                    return None
            except RenameIncompleteError as e:
                self._say(f"Warning: {e.message}")
                return e.new_slug
            except StoreIOError as e:
                self._say(f"Error: Failed to rename the data file. {e.message}")
                return None

        self._say(f"Successfully renamed '{old_name}' to '{raw}'.")
        self._say(
            f"Old filename: {old_slug}{DATA_FILE_SUFFIX} -> New filename: {new_slug}{DATA_FILE_SUFFIX}"
        )
        return new_slug

    def delete_record(self) -> bool:
        self._say()
        self._say("--- Delete Plant Container ---")
        slug = self.select_record("Which plant container do you want to DELETE?")
        if slug is None:
            self._say("Delete operation cancelled or no plant selected.")
            return False

        name = self.store.display_name(slug)
        path = self.store.path_for(slug)
        self._say("WARNING: You are about to delete all data for plant container:")
        self._say(f"  Name: {name}")
        self._say(f"  File: {path}")
        answer = self._input(
            "This action cannot be undone. Are you sure you want to delete? (yes/NO): "
        )
        if answer.strip().lower() != "yes":
            self._say("Deletion cancelled by user.")
            self.store.events.record(
                f"Deletion cancelled for plant container: '{name}' (File: {path})"
            )
            return False

        try:
            self.store.delete(slug)
        except StoreIOError as e:
            self._say(f"Error: Could not delete file '{path}'. {e.message}")
            return False
        self._say(f"Successfully deleted plant container '{name}'.")
        return True

    # ── I/O helpers ───────────────────────────────────────────

    def _confirm(self, prompt: str) -> bool:
        return self._input(prompt).strip().lower() == "y"

    def _say(self, text: str = "") -> None:
        print(text, file=self._out or sys.stdout)
