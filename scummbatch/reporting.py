# scummbatch/reporting.py
from __future__ import annotations

import logging
import threading
import time
import traceback
from datetime import datetime
from typing import List, Optional, Set, Tuple, Union

import requests

from .models import FaultInfo, GenerationRequest
from .utils import display_text, os_descriptor, runtime_descriptor, tail_lines

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────────────────
# Fault capture
# ──────────────────────────────────────────────────────────────────────────────

def _type_name(exc: BaseException) -> str:
    cls = type(exc)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"

def _source_of(exc: BaseException) -> str:
    """Module in which the exception was raised (innermost frame)."""
    tb = exc.__traceback__
    if tb is None:
        return ""
    while tb.tb_next is not None:
        tb = tb.tb_next
    return str(tb.tb_frame.f_globals.get("__name__", ""))

def fault_info_from(exc: BaseException, *, nested: bool = True) -> FaultInfo:
    inner = None
    if nested:
        cause = exc.__cause__
        if cause is None and not exc.__suppress_context__:
            cause = exc.__context__
        if cause is not None:
            inner = fault_info_from(cause, nested=False)
    return FaultInfo(
        type_name=_type_name(exc),
        message=str(exc),
        source=_source_of(exc),
        stack_trace="".join(traceback.format_tb(exc.__traceback__)).rstrip("\n"),
        inner=inner,
    )

# ──────────────────────────────────────────────────────────────────────────────
# Report assembly
# ──────────────────────────────────────────────────────────────────────────────

def _fault_lines(f: FaultInfo) -> List[str]:
    return [
        f"Type: {f.type_name}",
        f"Message: {f.message}",
        f"Source: {f.source}",
        "Stack Trace:",
        f.stack_trace,
    ]

def build_report(
    message: str,
    fault: Optional[FaultInfo] = None,
    *,
    app_name: str,
    version: str,
    log_lines: Optional[List[str]] = None,
    request: Optional[GenerationRequest] = None,
    now: Optional[datetime] = None,
) -> str:
    out: List[str] = []
    out.append("=== Bug Report ===")
    out.append(f"Application: {app_name}")
    out.append(f"Version: {version}")
    out.append(f"OS: {os_descriptor()}")
    out.append(f"Python Version: {runtime_descriptor()}")
    out.append(f"Date/Time: {(now or datetime.now()).strftime('%Y-%m-%d %H:%M:%S')}")
    out.append("")

    out.append("=== Error Message ===")
    out.append(message)
    out.append("")

    if fault is not None:
        out.append("=== Exception Details ===")
        out.extend(_fault_lines(fault))
        if fault.inner is not None:
            out.append("Inner Exception:")
            out.extend(_fault_lines(fault.inner))

    if log_lines:
        out.append("")
        out.append("=== Application Log ===")
        out.extend(log_lines)

    if request is not None:
        out.append("")
        out.append("=== Configuration ===")
        out.append(f"ScummVM Path: {request.executable_path}")
        out.append(f"Games Folder: {request.root_folder}")

    return "\n".join(out) + "\n"

# ──────────────────────────────────────────────────────────────────────────────
# Transmission
# ──────────────────────────────────────────────────────────────────────────────

class BugReportService:
    """
    Process-wide client for the report collector. One `requests.Session` is
    shared by every report; nothing needs closing before exit.
    """

    def __init__(self, url: str, api_key: str = "", timeout: float = 10.0, session=None):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"Content-Type": "text/plain; charset=utf-8"})
        if api_key:
            self.session.headers.update({"X-API-KEY": api_key})
        self._inflight: Set[threading.Thread] = set()
        self._lock = threading.Lock()

    @property
    def configured(self) -> bool:
        return bool(self.url and self.api_key)

    def send(self, report: str) -> Tuple[bool, str]:
        """Blocking single POST. Never raises."""
        if not self.configured:
            return False, "Bug report service not configured."
        try:
            resp = self.session.post(self.url, data=display_text(report).encode("utf-8"), timeout=self.timeout)
            if 200 <= resp.status_code < 300:
                return True, "Sent."
            return False, f"Collector responded {resp.status_code}."
        except Exception as e:
            return False, str(e)

    def send_async(self, report: str) -> threading.Thread:
        """Fire-and-forget: the thread's outcome is only ever logged at DEBUG."""
        def _run():
            try:
                ok, msg = self.send(report)
                logger.debug("bug report %s: %s", "sent" if ok else "dropped", msg)
            finally:
                with self._lock:
                    self._inflight.discard(threading.current_thread())

        t = threading.Thread(target=_run, name="bug-report", daemon=True)
        with self._lock:
            self._inflight.add(t)
        try:
            t.start()
        except RuntimeError:
            # never started, so nothing to join later
            with self._lock:
                self._inflight.discard(t)
            raise
        return t

    def pending(self) -> int:
        with self._lock:
            return len(self._inflight)

    def drain(self, timeout: float = 2.0) -> bool:
        """Wait up to `timeout` seconds for in-flight reports. True if none remain."""
        deadline = time.monotonic() + timeout
        while True:
            with self._lock:
                threads = list(self._inflight)
            if not threads:
                return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            threads[0].join(remaining)

class DiagnosticReporter:
    """
    Assembles a report and hands it to the shared service without waiting.

    `report()` returns `(ok, message)` where ok means "assembled and handed
    off"; it never raises and callers are free to ignore the result.
    """

    def __init__(self, service: Optional[BugReportService], *, app_name: str, version: str,
                 workspace=None, log_tail: int = 200):
        self.service = service
        self.app_name = app_name
        self.version = version
        self.workspace = workspace
        self.log_tail = log_tail

    def report(
        self,
        message: str,
        fault: Union[BaseException, FaultInfo, None] = None,
        *,
        log_lines: Optional[List[str]] = None,
        request: Optional[GenerationRequest] = None,
    ) -> Tuple[bool, str]:
        try:
            if isinstance(fault, BaseException):
                fault = fault_info_from(fault)
            if log_lines is None and self.workspace is not None:
                log_lines = self.workspace.lines()
            if request is None and self.workspace is not None:
                request = self.workspace.current_request()

            text = build_report(
                message,
                fault,
                app_name=self.app_name,
                version=self.version,
                log_lines=tail_lines(log_lines or [], self.log_tail),
                request=request,
            )
            if self.service is None:
                return False, "No bug report service."
            self.service.send_async(text)
            return True, "Report queued."
        except Exception as e:
            return False, str(e)
