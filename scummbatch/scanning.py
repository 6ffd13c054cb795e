import os
from pathlib import Path
from typing import List, Union

from .models import GameFolderEntry
from .utils import quote_path

LAUNCH_FLAGS = ("--auto-detect", "--fullscreen")

def list_game_folders(root_folder: Union[Path, str]) -> List[GameFolderEntry]:
    """Immediate subdirectories of root_folder, sorted by name (case-insensitive).

    Errors from listing the root itself (missing, permission denied) propagate.
    """
    root = Path(root_folder)
    entries: List[GameFolderEntry] = []
    for p in root.iterdir():
        if not p.is_dir():
            continue
        entries.append(GameFolderEntry(name=p.name, full_path=str(p)))
    entries.sort(key=lambda e: (e.name.lower(), e.name))
    return entries

def script_path_for(root_folder: Union[Path, str], entry: GameFolderEntry, ext: str) -> Path:
    return Path(root_folder) / f"{entry.name}{ext}"

def launcher_line(executable_path: str, game_path: str) -> str:
    parts = [quote_path(executable_path), "-p", quote_path(game_path)]
    parts.extend(LAUNCH_FLAGS)
    return " ".join(parts)

def write_launcher(dest: Path, line: str) -> None:
    # Encode before opening so a bad line never truncates an existing launcher.
    # surrogateescape writes undecodable filename bytes back out unchanged.
    data = (line + os.linesep).encode("utf-8", "surrogateescape")
    with open(dest, "wb") as f:
        f.write(data)
