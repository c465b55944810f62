from __future__ import annotations

"""
Post-Order Tree Obliteration.

Walks a tree depth-first and destroys it bottom-up: every child is fully
removed (content and name) before the next sibling starts, and a directory is
obliterated only once it is empty. Entry kinds are dispatched to strategies,
so regular files go to the external shredder while directories and special
entries go through the name obliterator.

The walk is strictly sequential. An interrupted run leaves a valid tree:
removed entries are gone, at most one entry per directory holds an all-zero
intermediate name, the rest is untouched. Re-running resumes the work.
"""

import logging
import os
from typing import Callable, Dict, Optional, Tuple

from shrem.core.obliterator import NameObliterator
from shrem.core.shredder import ContentShredInvoker
from shrem.domain.errors import IsADirectory, ObliterationError, from_os_error
from shrem.domain.models import EntryKind, FileSystemEntry, RunResult, is_intermediate_name

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


# -----------------------------------------------------------------------------
# STRATEGIES
# -----------------------------------------------------------------------------

class EntryStrategy:
    """Destroy one entry of a given kind. Returns True if it was removed."""

    def __init__(self, walker: "DirectoryWalker") -> None:
        self.walker = walker

    def obliterate(self, entry: FileSystemEntry, result: RunResult) -> bool:
        raise NotImplementedError


class FileStrategy(EntryStrategy):
    """Regular files: one opaque call to the external shredder."""

    def obliterate(self, entry: FileSystemEntry, result: RunResult) -> bool:
        if not self.walker.confirm_action(f"remove file '{entry.path}'?"):
            return self.walker.skip(entry, result)
        self.walker.shredder.shred_file(entry.path)
        return True


class DirectoryStrategy(EntryStrategy):
    """Directories: drain children depth-first, then obliterate the name."""

    def obliterate(self, entry: FileSystemEntry, result: RunResult) -> bool:
        if not self.walker.confirm_action(f"descend into directory '{entry.path}'?"):
            return self.walker.skip(entry, result)

        try:
            with os.scandir(entry.path) as it:
                # Leftovers of an interrupted run first, so no sibling shrinks onto them
                names = sorted((e.name for e in it), key=_drain_order)
        except OSError as e:
            raise from_os_error(e, entry.path, operation="scan") from e

        drained = True
        for name in names:
            if not self.walker.visit(os.path.join(entry.path, name), result):
                drained = False

        if not drained:
            # Never force a directory that still holds entries
            logger.info(f"Leaving '{entry.path}' in place: not all of its entries were removed")
            if entry.path not in result.skipped:
                result.skipped.append(entry.path)
            return False

        if not self.walker.confirm_action(f"remove directory '{entry.path}'?"):
            return self.walker.skip(entry, result)
        self.walker.obliterator.obliterate(entry.path, EntryKind.DIRECTORY)
        return True


class OtherStrategy(EntryStrategy):
    """Symlinks and special files: nothing to overwrite, obliterate the name."""

    def obliterate(self, entry: FileSystemEntry, result: RunResult) -> bool:
        if not self.walker.confirm_action(f"remove '{entry.path}'?"):
            return self.walker.skip(entry, result)
        self.walker.obliterator.obliterate(entry.path, EntryKind.OTHER)
        return True


# -----------------------------------------------------------------------------
# WALKER
# -----------------------------------------------------------------------------

class DirectoryWalker:
    """
    Obliterate whole trees through per-kind strategies.

    Args:
        shredder: Boundary to the external content shredder.
        obliterator: Name obliterator for directories and special entries.
        recursive: Allow directory roots.
        force: Ignore roots that do not exist.
        confirm: Prompt callback; when given, every removal is confirmed.
    """

    def __init__(
            self,
            shredder: ContentShredInvoker,
            obliterator: NameObliterator,
            *,
            recursive: bool = False,
            force: bool = False,
            confirm: Optional[Confirm] = None,
    ) -> None:
        self.shredder = shredder
        self.obliterator = obliterator
        self.recursive = recursive
        self.force = force
        self.confirm = confirm
        self.strategies: Dict[EntryKind, EntryStrategy] = {
            EntryKind.FILE: FileStrategy(self),
            EntryKind.DIRECTORY: DirectoryStrategy(self),
            EntryKind.OTHER: OtherStrategy(self),
        }

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def obliterate_tree(self, root: str, result: Optional[RunResult] = None) -> RunResult:
        """
        Destroy *root* and, for directories, everything below it.

        Args:
            root: File or directory to destroy.
            result: Accumulator shared across several roots.

        Returns:
            RunResult: Counters, skipped entries and failures of the run.
        """
        result = result if result is not None else RunResult()
        result.roots.append(root)

        path = _strip_trailing_sep(root)
        if os.path.basename(path) in (".", ".."):
            result.failures.append(ObliterationError(
                root, "refusing to remove '.' or '..' directory", operation="scan"
            ))
            return result
        if os.path.abspath(path) == os.path.abspath(os.sep):
            result.failures.append(ObliterationError(
                root, "refusing to remove the filesystem root", operation="scan"
            ))
            return result

        if self.force and not os.path.lexists(path):
            logger.debug(f"Ignoring nonexistent root '{root}'")
            return result

        if not self.recursive and os.path.isdir(path) and not os.path.islink(path):
            result.failures.append(IsADirectory(root, "Is a directory", operation="scan"))
            return result

        self.visit(path, result)
        return result

    def visit(self, path: str, result: RunResult) -> bool:
        """
        Obliterate a single entry through the strategy matching its kind.

        Failures are recorded on *result* rather than raised so that sibling
        subtrees keep being processed.

        Returns:
            bool: True if the entry no longer exists.
        """
        try:
            entry = FileSystemEntry.from_path(path)
        except OSError as e:
            self._record(from_os_error(e, path, operation="scan"), result)
            return False

        try:
            removed = self.strategies[entry.kind].obliterate(entry, result)
        except ObliterationError as e:
            self._record(e, result)
            return False

        if removed:
            result.count_removed(entry.kind)
        return removed

    # -------------------------------------------------------------------------
    # STRATEGY SUPPORT
    # -------------------------------------------------------------------------

    def confirm_action(self, question: str) -> bool:
        if self.confirm is None:
            return True
        return bool(self.confirm(question))

    def skip(self, entry: FileSystemEntry, result: RunResult) -> bool:
        logger.info(f"Skipped '{entry.path}'")
        result.skipped.append(entry.path)
        return False

    def _record(self, error: ObliterationError, result: RunResult) -> None:
        logger.error(error.describe())
        result.failures.append(error)


def _strip_trailing_sep(path: str) -> str:
    stripped = path.rstrip(os.sep)
    return stripped or path


def _drain_order(name: str) -> Tuple[bool, str]:
    return (not is_intermediate_name(name), name)
