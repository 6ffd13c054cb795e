"""
Top-level flow: selection, precondition checks, non-reentrancy, Flask pages.
"""
import os
import sys
from pathlib import Path

import pytest

from scummbatch import create_app
from scummbatch.flow import create_batch_files, select_executable, select_folder
from scummbatch.reporting import BugReportService
from scummbatch.workspace import BANNER, Workspace


class RecordingReporter:
    def __init__(self):
        self.calls = []

    def report(self, message, fault=None, **kw):
        self.calls.append((message, fault))
        return True, "recorded"


def _touch(p: Path, data: bytes = b""):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data or b"stub")


@pytest.fixture
def setup(tmp_path):
    root = tmp_path / "Games"
    (root / "Monkey1").mkdir(parents=True)
    (root / "Sam and Max").mkdir()
    exe = tmp_path / "ScummVM" / "scummvm.exe"
    _touch(exe)
    return root, exe


def test_banner_and_ready():
    ws = Workspace()
    assert ws.lines() == BANNER
    assert ws.status == "Ready"


def test_full_run(setup):
    root, exe = setup
    ws, reporter = Workspace(), RecordingReporter()
    assert select_executable(ws, reporter, str(exe))[0]
    assert select_folder(ws, str(root))[0]
    assert ws.status == "Game folder selected."

    outcome = create_batch_files(ws, reporter, ext=".bat")

    assert outcome is not None and outcome.created_count == 2
    assert (root / "Sam and Max.bat").exists()
    assert ws.status == "2 batch files created successfully."
    assert [n.kind for n in ws.pop_notices()] == ["success"]
    assert reporter.calls == []


def test_unexpected_executable_name_is_reported(tmp_path):
    ws, reporter = Workspace(), RecordingReporter()
    ok, _ = select_executable(ws, reporter, str(tmp_path / "residualvm.exe"))
    assert ok
    assert ws.lines()[-1] == "Warning: The selected file does not appear to be scummvm.exe."
    assert reporter.calls[0][0].startswith("User selected a file that doesn't appear to be scummvm.exe")


def test_missing_executable_never_touches_root(setup, tmp_path):
    root, _ = setup
    before = sorted(p.name for p in root.iterdir())
    ws, reporter = Workspace(), RecordingReporter()
    select_executable(ws, reporter, str(tmp_path / "gone" / "scummvm.exe"))
    select_folder(ws, str(root))

    assert create_batch_files(ws, reporter, ext=".bat") is None

    assert ws.status == "Error: ScummVM executable not found."
    assert [n.message for n in ws.pop_notices()] == ["The selected ScummVM executable file does not exist."]
    assert reporter.calls[-1][0] == "ScummVM executable not found"
    assert isinstance(reporter.calls[-1][1], FileNotFoundError)
    assert sorted(p.name for p in root.iterdir()) == before


@pytest.mark.parametrize("exe_set,root_set,status,reported", [
    (False, True, "Error: ScummVM executable not selected.", False),
    (True, False, "Error: Game folder not selected.", False),
])
def test_unselected_inputs(setup, exe_set, root_set, status, reported):
    root, exe = setup
    ws, reporter = Workspace(), RecordingReporter()
    if exe_set:
        ws.executable_path = str(exe)
    if root_set:
        ws.root_folder = str(root)

    assert create_batch_files(ws, reporter) is None
    assert ws.status == status
    assert bool(reporter.calls) is reported


def test_missing_root_folder(setup, tmp_path):
    _, exe = setup
    ws, reporter = Workspace(), RecordingReporter()
    ws.executable_path = str(exe)
    ws.root_folder = str(tmp_path / "nowhere")

    assert create_batch_files(ws, reporter) is None
    assert ws.status == "Error: Game folder not found."
    assert reporter.calls[-1][0] == "Game folder not found"


def test_listing_error_sets_failed_status(setup, monkeypatch):
    root, exe = setup
    from scummbatch import scanning

    def denied(_root):
        raise PermissionError(13, "Permission denied", str(_root))

    monkeypatch.setattr(scanning, "list_game_folders", denied)
    ws, reporter = Workspace(), RecordingReporter()
    ws.executable_path, ws.root_folder = str(exe), str(root)

    assert create_batch_files(ws, reporter) is None
    assert ws.status == "Process failed with an error."
    assert ws.lines()[-1].startswith("Error creating batch files:")
    assert [m for m, _ in reporter.calls] == [
        "Error accessing folder structure during batch file creation",
        "Error creating batch files",
    ]


def test_second_run_is_refused_while_busy(setup):
    root, exe = setup
    ws, reporter = Workspace(), RecordingReporter()
    ws.executable_path, ws.root_folder = str(exe), str(root)

    with ws.run_lock:
        assert create_batch_files(ws, reporter) is None
    assert not list(root.glob("*.bat")) and not list(root.glob("*.sh"))
    assert ws.pop_notices()[0].message == "Batch file creation is already running."


def test_flask_pages(setup):
    root, exe = setup
    app = create_app(service=BugReportService("", ""))
    app.config["SCRIPT_EXT"] = ".bat"
    client = app.test_client()
    assert {"REPORT_URL", "REPORT_API_KEY", "REPORT_TIMEOUT", "LOG_TAIL"} <= set(app.config)

    r = client.get("/")
    assert r.status_code == 200
    assert b"Welcome to the Batch File Creator for ScummVM Games." in r.data
    assert b"Ready" in r.data

    client.post("/executable", data={"executable_path": str(exe)})
    client.post("/folder", data={"root_folder": str(root)})
    r = client.post("/create", headers={"Accept": "application/json"})
    body = r.get_json()
    assert body["ok"] is True
    assert body["created"] == 2
    assert body["status"] == "2 batch files created successfully."
    assert body["notices"][0]["kind"] == "success"
    assert sorted(Path(p).name for p in body["created_paths"]) == ["Monkey1.bat", "Sam and Max.bat"]
    assert (root / "Monkey1.bat").exists()

    log = client.get("/log").get_json()
    assert "Batch file created: " + str(root / "Monkey1.bat") in log["lines"]
    assert log["busy"] is False

    r = client.get("/about")
    assert r.status_code == 200 and b"CreateBatchFilesForScummVMGames" in r.data


def test_flask_create_redirects_with_notice(setup, tmp_path):
    app = create_app(service=BugReportService("", ""))
    client = app.test_client()
    client.post("/folder", data={"root_folder": str(tmp_path / "none")})

    r = client.post("/create", follow_redirects=True)
    assert r.status_code == 200
    assert b"Please select the ScummVM executable file" in r.data
    assert b"Error: ScummVM executable not selected." in r.data


def test_listeners_see_log_and_status():
    ws = Workspace(banner=False)
    events = []
    ws.subscribe(lambda kind, text: events.append((kind, text)))

    ws.log("Game folder selected: D:\\Games")
    ws.set_status("Game folder selected.")

    assert events == [("log", "Game folder selected: D:\\Games"), ("status", "Game folder selected.")]


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="needs raw byte file names")
def test_page_survives_undecodable_folder_name(setup):
    root, exe = setup
    os.mkdir(os.path.join(os.fsencode(root), b"Loom\xff"))
    app = create_app(service=BugReportService("", ""))
    app.config["SCRIPT_EXT"] = ".bat"
    client = app.test_client()
    client.post("/executable", data={"executable_path": str(exe)})
    client.post("/folder", data={"root_folder": str(root)})

    body = client.post("/create", headers={"Accept": "application/json"}).get_json()
    assert body["created"] == 3
    assert body["failures"] == []

    r = client.get("/")
    assert r.status_code == 200
    assert "Loom\ufffd.bat".encode("utf-8") in r.data
    assert client.get("/log").status_code == 200
