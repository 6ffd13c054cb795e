from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from .models import GenerationRequest
from .utils import display_text

logger = logging.getLogger("scummbatch")

BANNER = [
    "Welcome to the Batch File Creator for ScummVM Games.",
    "",
    "This program creates batch files to launch your ScummVM games.",
    "Please follow these steps:",
    "1. Select the ScummVM executable file (scummvm.exe)",
    "2. Select the root folder containing your ScummVM game folders",
    "3. Click 'Create Batch Files' to generate the batch files",
    "",
]

@dataclass
class Notice:
    kind: str       # "success" | "error"
    title: str
    message: str

class Workspace:
    """
    Per-process UI state: the two selected paths, the append-only log
    transcript, the current status string and pending notices.

    The core only sees it through `log`, `set_status` and `notify`; listeners
    let a front-end mirror changes onto its own thread.
    """

    def __init__(self, banner: bool = True):
        self.executable_path = ""
        self.root_folder = ""
        self.status = ""
        self._lines: List[str] = []
        self._notices: List[Notice] = []
        self._lock = threading.Lock()
        self._listeners: List[Callable[[str, str], None]] = []
        self.run_lock = threading.Lock()      # one generation at a time
        if banner:
            for line in BANNER:
                self.log(line)
        self.set_status("Ready")

    def subscribe(self, fn: Callable[[str, str], None]) -> None:
        """fn(kind, text) with kind in {"log", "status"}."""
        self._listeners.append(fn)

    def _emit(self, kind: str, text: str) -> None:
        for fn in list(self._listeners):
            fn(kind, text)

    def log(self, message: str) -> None:
        with self._lock:
            self._lines.append(message)
        if message:
            logger.info(message)
        self._emit("log", message)

    def set_status(self, message: str) -> None:
        self.status = message
        self._emit("status", message)

    def notify(self, kind: str, message: str, title: Optional[str] = None) -> None:
        with self._lock:
            self._notices.append(Notice(kind=kind, title=title or kind.title(), message=message))

    def pop_notices(self) -> List[Notice]:
        with self._lock:
            out, self._notices = self._notices, []
        return out

    def lines(self) -> List[str]:
        with self._lock:
            return [display_text(line) for line in self._lines]

    def transcript(self) -> str:
        return "\n".join(self.lines())

    def current_request(self) -> Optional[GenerationRequest]:
        if self.executable_path and self.root_folder:
            return GenerationRequest(self.executable_path, self.root_folder)
        return None
