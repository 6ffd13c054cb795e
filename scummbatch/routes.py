from __future__ import annotations
from flask import Blueprint, current_app, render_template_string, redirect, url_for, flash, request, jsonify

from .flow import select_executable, select_folder, create_batch_files
from .templates import INDEX_HTML, ABOUT_HTML
from .utils import display_text

bp = Blueprint("scummbatch", __name__)

def _ctx():
    ext = current_app.extensions["scummbatch"]
    return ext["workspace"], ext["reporter"]

def _flash_notices(ws):
    for n in ws.pop_notices():
        flash(n.message, "success" if n.kind == "success" else "danger")

@bp.get("/")
def index():
    ws, _ = _ctx()
    return render_template_string(
        INDEX_HTML,
        app_title=current_app.config["APP_TITLE"],
        ws=ws,
        log_text=ws.transcript(),
        busy=ws.run_lock.locked(),
    )

@bp.post("/executable")
def choose_executable():
    ws, reporter = _ctx()
    ok, msg = select_executable(ws, reporter, request.form.get("executable_path", ""))
    if not ok:
        flash(msg, "warning")
    return redirect(url_for("scummbatch.index"))

@bp.post("/folder")
def choose_folder():
    ws, _ = _ctx()
    ok, msg = select_folder(ws, request.form.get("root_folder", ""))
    if not ok:
        flash(msg, "warning")
    return redirect(url_for("scummbatch.index"))

@bp.post("/create")
def create():
    ws, reporter = _ctx()
    outcome = create_batch_files(ws, reporter, ext=current_app.config["SCRIPT_EXT"])

    if request.accept_mimetypes.accept_json and not request.accept_mimetypes.accept_html:
        notices = [{"kind": n.kind, "title": n.title, "message": n.message} for n in ws.pop_notices()]
        body = {
            "ok": bool(outcome and outcome.ok),
            "created": outcome.created_count if outcome else 0,
            "created_paths": [display_text(str(p)) for p in outcome.created_paths] if outcome else [],
            "failures": [display_text(f.entry.name) for f in outcome.failures] if outcome else [],
            "status": ws.status,
            "notices": notices,
        }
        return jsonify(body), 200

    _flash_notices(ws)
    return redirect(url_for("scummbatch.index"))

@bp.get("/log")
def log():
    ws, _ = _ctx()
    return jsonify({"lines": ws.lines(), "status": ws.status, "busy": ws.run_lock.locked()})

@bp.get("/about")
def about():
    ws, reporter = _ctx()
    try:
        return render_template_string(
            ABOUT_HTML,
            app_title=current_app.config["APP_TITLE"],
            app_name=current_app.config["APP_NAME"],
            version=current_app.config["APP_VERSION"],
        )
    except Exception as e:
        ws.log(f"Error opening About window: {e}")
        reporter.report("Error opening About window", e)
        flash("Could not open the About page.", "danger")
        return redirect(url_for("scummbatch.index"))

@bp.get("/favicon.ico")
def favicon():
    return ("", 204)
