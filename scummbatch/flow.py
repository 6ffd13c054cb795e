# scummbatch/flow.py
"""
Top-level actions behind the three UI controls: pick executable, pick
folder, create batch files. Each action logs, updates the status and
queues notices on the Workspace; nothing here raises to the caller.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from .generate import BatchGenerator
from .models import GenerationOutcome
from .utils import existing_dir, existing_file, looks_like_scummvm
from .workspace import Workspace

logger = logging.getLogger(__name__)

def select_executable(ws: Workspace, reporter, path: str) -> Tuple[bool, str]:
    path = (path or "").strip().strip('"')
    if not path:
        return False, "No file selected."
    ws.executable_path = path
    ws.log(f"ScummVM executable selected: {path}")
    ws.set_status("ScummVM executable selected.")
    if not looks_like_scummvm(path):
        ws.log("Warning: The selected file does not appear to be scummvm.exe.")
        reporter.report("User selected a file that doesn't appear to be scummvm.exe: " + path)
    return True, path

def select_folder(ws: Workspace, path: str) -> Tuple[bool, str]:
    path = (path or "").strip().strip('"')
    if not path:
        return False, "No folder selected."
    ws.root_folder = path
    ws.log(f"Game folder selected: {path}")
    ws.set_status("Game folder selected.")
    return True, path

def _check_preconditions(ws: Workspace, reporter) -> bool:
    exe, root = ws.executable_path, ws.root_folder

    if not exe:
        ws.log("Error: No ScummVM executable selected.")
        ws.notify("error", "Please select the ScummVM executable file (scummvm.exe).")
        ws.set_status("Error: ScummVM executable not selected.")
        return False

    if not existing_file(exe):
        ws.log(f"Error: ScummVM executable not found at path: {exe}")
        ws.notify("error", "The selected ScummVM executable file does not exist.")
        reporter.report("ScummVM executable not found",
                        FileNotFoundError(f"The ScummVM executable was not found: {exe}"))
        ws.set_status("Error: ScummVM executable not found.")
        return False

    if not root:
        ws.log("Error: No game folder selected.")
        ws.notify("error", "Please select the root folder containing your ScummVM game folders.")
        ws.set_status("Error: Game folder not selected.")
        return False

    if not existing_dir(root):
        ws.log(f"Error: Game folder not found at path: {root}")
        ws.notify("error", "The selected game folder does not exist.")
        reporter.report("Game folder not found", FileNotFoundError(f"Game folder not found: {root}"))
        ws.set_status("Error: Game folder not found.")
        return False

    return True

def create_batch_files(ws: Workspace, reporter, ext: Optional[str] = None) -> Optional[GenerationOutcome]:
    """Validate, then run BatchGenerator. Returns None if nothing was attempted or the run failed."""
    if not ws.run_lock.acquire(blocking=False):
        ws.notify("error", "Batch file creation is already running.")
        return None
    try:
        try:
            if not _check_preconditions(ws, reporter):
                return None
            gen = BatchGenerator(reporter, log=ws.log, set_status=ws.set_status, notify=ws.notify, ext=ext)
            try:
                return gen.generate(ws.root_folder, ws.executable_path)
            except Exception as e:
                ws.log(f"Error creating batch files: {e}")
                ws.notify("error", f"An error occurred while creating batch files: {e}")
                reporter.report("Error creating batch files", e)
                ws.set_status("Process failed with an error.")
                return None
        except Exception as e:
            logger.exception("unexpected failure in create_batch_files")
            reporter.report("Error creating batch files", e)
            ws.set_status("An unexpected error occurred.")
            return None
    finally:
        ws.run_lock.release()
