#!/usr/bin/env python3
import os
import sys
from scummbatch import create_app, ensure_root, BIND, PORT
from scummbatch.logging_config import setup_logging

def _resolve_root_folder():
    if len(sys.argv) >= 2:
        return os.path.abspath(sys.argv[1])
    env = os.environ.get("GAMES_ROOT")
    return os.path.abspath(env) if env else None

if __name__ == "__main__":
    setup_logging()
    root_folder = _resolve_root_folder()
    if root_folder:
        ensure_root(root_folder)
    app = create_app(root_folder, executable_path=os.environ.get("SCUMMVM_EXE"))
    app.run(host=BIND, port=PORT, debug=False, threaded=True)
