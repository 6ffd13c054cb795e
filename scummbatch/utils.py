import os
import platform
import sys
from pathlib import Path
from typing import List, Optional

SCUMMVM_EXE_NAME = "scummvm.exe"

def is_windows() -> bool:
    return os.name == "nt"

def script_extension() -> str:
    env = os.environ.get("SCUMMBATCH_SCRIPT_EXT")
    if env:
        return env if env.startswith(".") else "." + env
    return ".bat" if is_windows() else ".sh"

def looks_like_scummvm(exe_path: str) -> bool:
    return exe_path.lower().endswith(SCUMMVM_EXE_NAME)

def quote_path(p: str) -> str:
    # No escaping: a path holding '"' produces a broken line.
    return f'"{p}"'

def has_embedded_quote(*paths: str) -> bool:
    return any('"' in p for p in paths)

def os_descriptor() -> str:
    return f"{platform.system()} {platform.release()} ({platform.version()})"

def runtime_descriptor() -> str:
    return f"{platform.python_implementation()} {sys.version.split()[0]}"

def tail_lines(lines: List[str], count: int) -> List[str]:
    if count <= 0:
        return []
    return lines[-count:]

def existing_file(path: Optional[str]) -> bool:
    return bool(path) and Path(path).is_file()

def existing_dir(path: Optional[str]) -> bool:
    return bool(path) and Path(path).is_dir()

def display_text(s: str) -> str:
    """Undecodable filename bytes (surrogate escapes) become U+FFFD."""
    try:
        raw = s.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = s.encode("utf-8", "replace")
    return raw.decode("utf-8", "replace")
