from __future__ import annotations

"""
Obliteration Domain Data Models.

Defines the entries the walker operates on, the shrinking name sequence
applied to them, and the result objects handed back to the interface layer.
"""

import os
import stat
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List

from shrem.domain.errors import ObliterationError

# Character every intermediate name is built from
FILL_CHAR = "0"


# -----------------------------------------------------------------------------
# ENTRY MODEL
# -----------------------------------------------------------------------------

class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


@dataclass(frozen=True)
class FileSystemEntry:
    """
    A filesystem object as seen at discovery time.

    Identity is the path at the moment of the operation; renames produce a
    new identity, so entries are never cached across operations.

    Attributes:
        path: Current path of the entry.
        kind: Classification derived from lstat (symlinks are never followed).
    """
    path: str
    kind: EntryKind

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @classmethod
    def from_path(cls, path: str) -> "FileSystemEntry":
        """Classify *path* without following symbolic links (raises OSError)."""
        mode = os.lstat(path).st_mode
        if stat.S_ISDIR(mode):
            kind = EntryKind.DIRECTORY
        elif stat.S_ISREG(mode):
            kind = EntryKind.FILE
        else:
            kind = EntryKind.OTHER
        return cls(path=path, kind=kind)


# -----------------------------------------------------------------------------
# OBLITERATION SEQUENCE
# -----------------------------------------------------------------------------

def obliteration_sequence(length: int) -> Iterator[str]:
    """
    Yield the intermediate names for an entry whose name has *length* chars.

    The names are FILL_CHAR repeated length, length - 1, ..., 1 times. They
    depend only on the length, never on the original characters.
    """
    for k in range(length, 0, -1):
        yield FILL_CHAR * k


def is_intermediate_name(name: str) -> bool:
    """True for names an interrupted obliteration may have left behind."""
    return bool(name) and name == FILL_CHAR * len(name)


# -----------------------------------------------------------------------------
# RESULT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ShredReport:
    """
    Outcome of one external shred invocation.

    Attributes:
        path: File handed to the tool.
        lines: Progress lines the tool reported, in order.
        final_name: Last name the tool reported before removal.
    """
    path: str
    lines: List[str] = field(default_factory=list)
    final_name: str = ""


@dataclass
class RunResult:
    """
    Aggregated outcome of obliterating one or more roots.

    Attributes:
        roots: Root paths in the order they were processed.
        files_removed: Regular files shredded and removed.
        dirs_removed: Directories obliterated.
        others_removed: Links and special files obliterated.
        skipped: Entries left in place on user request or because a
                 descendant was left in place.
        failures: Errors in the order they occurred.
    """
    roots: List[str] = field(default_factory=list)
    files_removed: int = 0
    dirs_removed: int = 0
    others_removed: int = 0
    skipped: List[str] = field(default_factory=list)
    failures: List[ObliterationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def first_failure(self) -> ObliterationError | None:
        return self.failures[0] if self.failures else None

    def count_removed(self, kind: EntryKind) -> None:
        if kind is EntryKind.FILE:
            self.files_removed += 1
        elif kind is EntryKind.DIRECTORY:
            self.dirs_removed += 1
        else:
            self.others_removed += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "roots": list(self.roots),
            "files_removed": self.files_removed,
            "dirs_removed": self.dirs_removed,
            "others_removed": self.others_removed,
            "skipped": list(self.skipped),
            "failures": [f.to_dict() for f in self.failures],
        }
