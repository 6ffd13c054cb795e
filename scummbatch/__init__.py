import atexit
import os
from typing import Optional

from flask import Flask
from werkzeug.exceptions import HTTPException

from .flow import select_executable, select_folder
from .reporting import BugReportService, DiagnosticReporter
from .routes import bp as routes_bp
from .utils import script_extension
from .workspace import Workspace

__version__ = "1.0.0"

APP_NAME = "CreateBatchFilesForScummVMGames"

# Bind only localhost unless overridden
BIND = os.environ.get("BIND", "127.0.0.1")
PORT = int(os.environ.get("PORT", "5000"))
BUG_REPORT_URL = os.environ.get("BUG_REPORT_URL", "")
BUG_REPORT_API_KEY = os.environ.get("BUG_REPORT_API_KEY", "")
BUG_REPORT_TIMEOUT = float(os.environ.get("BUG_REPORT_TIMEOUT", "10"))
LOG_TAIL = int(os.environ.get("SCUMMBATCH_LOG_TAIL", "200"))

# Process-wide; built lazily by create_app() and reused by every app instance.
_service: Optional[BugReportService] = None

def get_service() -> BugReportService:
    global _service
    if _service is None:
        _service = BugReportService(BUG_REPORT_URL, BUG_REPORT_API_KEY, timeout=BUG_REPORT_TIMEOUT)
        atexit.register(_service.drain, 2.0)
    return _service

def ensure_root(root_folder: str) -> None:
    if not os.path.isdir(root_folder):
        raise SystemExit(f"Game folder does not exist: {root_folder}")

def create_app(root_folder: Optional[str] = None, executable_path: Optional[str] = None,
               service: Optional[BugReportService] = None) -> Flask:
    app = Flask(__name__)
    app.secret_key = os.environ.get("FLASK_SECRET", "dev-" + os.urandom(8).hex())
    app.config["APP_TITLE"] = "Batch File Creator for ScummVM Games"
    app.config["APP_NAME"] = APP_NAME
    app.config["APP_VERSION"] = __version__
    app.config["SCRIPT_EXT"] = script_extension()
    app.config["LOG_TAIL"] = LOG_TAIL
    app.config["REPORT_URL"] = BUG_REPORT_URL
    app.config["REPORT_API_KEY"] = BUG_REPORT_API_KEY
    app.config["REPORT_TIMEOUT"] = BUG_REPORT_TIMEOUT

    service = service or get_service()
    ws = Workspace()
    reporter = DiagnosticReporter(service, app_name=APP_NAME, version=__version__,
                                  workspace=ws, log_tail=LOG_TAIL)
    app.extensions["scummbatch"] = {"workspace": ws, "reporter": reporter, "service": service}

    # Optional preselection (e.g. from the command line)
    if executable_path:
        select_executable(ws, reporter, executable_path)
    if root_folder:
        select_folder(ws, root_folder)

    @app.errorhandler(Exception)
    def _unhandled(e):
        if isinstance(e, HTTPException):
            return e
        ws.log(f"Unexpected error: {e}")
        ws.set_status("An unexpected error occurred.")
        reporter.report("Unhandled exception", e)
        service.drain(2.0)
        return ("An unexpected error occurred. A report has been sent.", 500)

    app.register_blueprint(routes_bp)
    return app
