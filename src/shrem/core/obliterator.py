from __future__ import annotations

"""
Name Obliteration Service.

Renames an entry through the shrinking all-zero name sequence and removes it
under the last name, reproducing for directories, links and special files the
pattern that 'shred -u' applies to regular files. Every step emits a
transcript line in the same '<prefix>: <name>: <action>' format the external
tool uses, so a combined transcript reads uniformly.
"""

import logging
import os
from typing import Callable, Optional

from shrem.domain.config import TOOL_PREFIX
from shrem.domain.errors import NameCollision, NotEmpty, from_os_error
from shrem.domain.models import EntryKind, obliteration_sequence

logger = logging.getLogger(__name__)

Reporter = Callable[[str], None]


def _silent(line: str) -> None:
    pass


class NameObliterator:
    """
    Shrink-rename an entry to a single '0' and remove it.

    Args:
        reporter: Receives each transcript line. Silent by default.
        prefix: Tool name prepended to transcript lines.
    """

    def __init__(self, reporter: Optional[Reporter] = None, prefix: str = TOOL_PREFIX) -> None:
        self.reporter = reporter or _silent
        self.prefix = prefix

    def obliterate(self, path: str, kind: EntryKind = EntryKind.DIRECTORY) -> str:
        """
        Obliterate the entry at *path*.

        Args:
            path: Entry to remove. A directory must already be empty.
            kind: Determines the final removal call (rmdir or unlink).

        Returns:
            str: The last name the entry held before removal.

        Raises:
            NotEmpty: The directory still has children. Nothing was renamed.
            NameCollision: A sibling already holds the next target name.
            ObliterationError: Any other failing rename or removal. The
                entry is left under its last successfully assigned name.
        """
        if kind is EntryKind.DIRECTORY:
            self._require_empty(path)

        parent, name = os.path.split(path)
        current = path

        self._emit(current, "removing")

        for step, target_name in enumerate(obliteration_sequence(len(name)), start=1):
            target = os.path.join(parent, target_name)
            if target == current:
                # Resumed entry already sitting at this intermediate name
                continue
            if os.path.lexists(target):
                raise NameCollision(
                    path,
                    f"target name '{target_name}' already exists",
                    current_path=current,
                    step=step,
                    operation="rename",
                )
            try:
                os.rename(current, target)
            except OSError as e:
                raise from_os_error(
                    e, path, current_path=current, step=step, operation="rename"
                ) from e
            self._emit(current, f"renamed to {target}")
            current = target

        try:
            if kind is EntryKind.DIRECTORY:
                os.rmdir(current)
            else:
                os.unlink(current)
        except OSError as e:
            raise from_os_error(e, path, current_path=current, operation="remove") from e

        self._emit(current, "removed")
        logger.debug(f"Obliterated {kind.value} '{path}' (last name '{current}')")
        return current

    def _require_empty(self, path: str) -> None:
        try:
            with os.scandir(path) as it:
                has_children = any(True for _ in it)
        except OSError as e:
            raise from_os_error(e, path, operation="scan") from e
        if has_children:
            raise NotEmpty(path, "directory not empty", operation="remove")

    def _emit(self, path: str, action: str) -> None:
        self.reporter(f"{self.prefix}: {path}: {action}")
