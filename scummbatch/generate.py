# scummbatch/generate.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from . import scanning
from .models import EntryFailure, GenerationOutcome
from .utils import has_embedded_quote, script_extension

logger = logging.getLogger(__name__)

SUCCESS_HINT = "They are located in the root folder of your ScummVM games."
NO_FOLDERS = "No game folders found. No batch files were created."

def _noop(*_a, **_kw) -> None:
    return None

class BatchGenerator:
    """
    Writes one launcher script per immediate subdirectory of a root folder.

    Callers validate the inputs first (existing executable file, existing
    root directory). Per-entry failures are logged, reported and skipped;
    only a failure to list the root folder propagates.
    """

    def __init__(
        self,
        reporter=None,
        *,
        log: Callable[[str], None] = _noop,
        set_status: Callable[[str], None] = _noop,
        notify: Callable[..., None] = _noop,
        ext: Optional[str] = None,
    ):
        self.reporter = reporter
        self.log = log
        self.set_status = set_status
        self.notify = notify
        self.ext = ext or script_extension()

    def _report(self, message: str, fault=None) -> None:
        if self.reporter is not None:
            self.reporter.report(message, fault)

    def generate(self, root_folder: Union[Path, str], executable_path: str) -> GenerationOutcome:
        root = str(root_folder)
        try:
            entries = scanning.list_game_folders(root)
        except Exception as e:
            self.log(f"Error accessing folder structure: {e}")
            self.set_status("Error accessing folder structure.")
            self._report("Error accessing folder structure during batch file creation", e)
            raise

        outcome = GenerationOutcome()
        self.log("")
        self.log("Starting batch file creation process...")
        self.set_status("Creating batch files...")

        for entry in entries:
            try:
                dest = scanning.script_path_for(root, entry, self.ext)
                if has_embedded_quote(executable_path, entry.full_path):
                    logger.warning("Path contains a double quote; launcher line will be malformed: %s", dest)
                scanning.write_launcher(dest, scanning.launcher_line(executable_path, entry.full_path))
            except Exception as e:
                outcome.failures.append(EntryFailure(entry=entry, reason=str(e)))
                self.log(f"Error creating batch file for {entry.full_path}: {e}")
                self._report(f"Error creating batch file for {entry.name}", e)
                continue
            outcome.created_count += 1
            outcome.created_paths.append(dest)
            self.log(f"Batch file created: {dest}")

        if outcome.created_count > 0:
            n = outcome.created_count
            self.log("")
            self.log(f"{n} batch files have been successfully created.")
            self.log(SUCCESS_HINT)
            self.set_status(f"{n} batch files created successfully.")
            self.notify("success", f"{n} batch files have been successfully created.\n\n{SUCCESS_HINT}", "Success")
        else:
            self.log(NO_FOLDERS)
            self.notify("error", NO_FOLDERS, "Error")
            self.set_status("No game folders found. No files were created.")
            self._report("No game folders found",
                         FileNotFoundError("No subdirectories found in the game folder"))

        return outcome
