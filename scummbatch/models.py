from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

@dataclass
class GenerationRequest:
    executable_path: str
    root_folder: str

@dataclass
class GameFolderEntry:
    name: str
    full_path: str

@dataclass
class EntryFailure:
    entry: GameFolderEntry
    reason: str

@dataclass
class GenerationOutcome:
    created_count: int = 0
    failures: List[EntryFailure] = field(default_factory=list)
    created_paths: List[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.created_count > 0

@dataclass
class FaultInfo:
    type_name: str
    message: str
    source: str
    stack_trace: str
    inner: Optional["FaultInfo"] = None      # one level only
