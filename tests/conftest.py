from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A fake content shredder that mimics 'shred -v -u' without the binary.
3. Helpers to build small directory trees.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from shrem.domain.errors import ExternalToolFailure  # noqa: E402
from shrem.domain.models import ShredReport, obliteration_sequence  # noqa: E402


# -----------------------------------------------------------------------------
# Fake Collaborators
# -----------------------------------------------------------------------------
class FakeShredder:
    """
    Stand-in for ContentShredInvoker.

    Emits the same transcript shape as 'shred -v -u -n 1' and removes the file
    through the shrinking rename sequence, so tests exercise the real
    filesystem without the external binary.
    """

    def __init__(
            self,
            reporter: Optional[Callable[[str], None]] = None,
            fail_on: Iterable[str] = (),
    ) -> None:
        self.reporter = reporter
        self.fail_on = set(fail_on)
        self.calls: List[str] = []

    def shred_file(self, path: str) -> ShredReport:
        self.calls.append(path)
        if os.path.basename(path) in self.fail_on:
            raise ExternalToolFailure(path, "simulated failure", operation="shred")

        lines = [f"shred: {path}: pass 1/1 (random)...", f"shred: {path}: removing"]
        parent, name = os.path.split(path)
        current = path
        for target_name in obliteration_sequence(len(name)):
            target = os.path.join(parent, target_name)
            if target == current:
                continue
            os.rename(current, target)
            lines.append(f"shred: {current}: renamed to {target}")
            current = target
        os.unlink(current)
        lines.append(f"shred: {current}: removed")

        if self.reporter:
            for line in lines:
                self.reporter(line)
        return ShredReport(path=path, lines=lines, final_name=current)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def transcript() -> List[str]:
    """A list that doubles as a transcript reporter through its append method."""
    return []


@pytest.fixture
def make_tree() -> Callable[[Path, Dict], Path]:
    """
    Build a tree from a nested dict: str values are file contents, dict
    values are subdirectories.
    """
    def _make(base: Path, layout: Dict) -> Path:
        base.mkdir(parents=True, exist_ok=True)
        for name, value in layout.items():
            if isinstance(value, dict):
                _make(base / name, value)
            else:
                (base / name).write_text(value, encoding="utf-8")
        return base
    return _make


@pytest.fixture
def fake_shredder() -> Callable[..., FakeShredder]:
    """Factory for FakeShredder instances."""
    return FakeShredder
