from __future__ import annotations

"""
Obliteration Error Hierarchy.

Every failure raised while shredding or obliterating an entry is attributed
to the entry it happened on and to the step that was being executed, so the
caller can report it, resume from the entry's current name, or abort.
"""

import errno
from typing import Optional

# -----------------------------------------------------------------------------
# BASE ERROR
# -----------------------------------------------------------------------------

class ObliterationError(Exception):
    """
    Base class for failures attributed to a single filesystem entry.

    Attributes:
        path: Path of the entry as it was discovered (original name).
        current_path: Name the entry holds on disk after the failure.
        step: 1-based index of the failing rename, or None outside the loop.
        operation: Phase that failed ('rename', 'remove', 'shred', 'scan').
        reason: Human readable cause.
    """

    kind = "error"

    def __init__(
            self,
            path: str,
            reason: str,
            *,
            current_path: Optional[str] = None,
            step: Optional[int] = None,
            operation: str = "remove",
    ) -> None:
        self.path = path
        self.current_path = current_path if current_path is not None else path
        self.step = step
        self.operation = operation
        self.reason = reason
        super().__init__(self.describe())

    def describe(self) -> str:
        """Render the failure as '<path>: <operation> [step N]: <reason>'."""
        where = self.operation if self.step is None else f"{self.operation} step {self.step}"
        msg = f"{self.path}: {where}: {self.reason}"
        if self.current_path != self.path:
            msg += f" (left at '{self.current_path}')"
        return msg

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "path": self.path,
            "current_path": self.current_path,
            "step": self.step,
            "operation": self.operation,
            "reason": self.reason,
        }


# -----------------------------------------------------------------------------
# CONCRETE ERRORS
# -----------------------------------------------------------------------------

class PermissionDenied(ObliterationError):
    kind = "permission_denied"


class NameCollision(ObliterationError):
    """The all-zero target name is already occupied by a sibling."""
    kind = "name_collision"


class NotEmpty(ObliterationError):
    """A directory still holds entries when it was about to be obliterated."""
    kind = "not_empty"


class ExternalToolFailure(ObliterationError):
    kind = "external_tool_failure"


class PathVanished(ObliterationError):
    """The entry disappeared between discovery and operation."""
    kind = "path_vanished"


class IsADirectory(ObliterationError):
    kind = "is_a_directory"


# -----------------------------------------------------------------------------
# OS ERROR TRANSLATION
# -----------------------------------------------------------------------------

def from_os_error(
        exc: OSError,
        path: str,
        *,
        current_path: Optional[str] = None,
        step: Optional[int] = None,
        operation: str = "remove",
) -> ObliterationError:
    """
    Map a raw OSError onto the obliteration error hierarchy.

    Args:
        exc: The error raised by the failing system call.
        path: Original path of the entry.
        current_path: Name held on disk when the call failed.
        step: Rename step index, if the failure happened inside the loop.
        operation: Failing phase.

    Returns:
        ObliterationError: The typed error (not raised).
    """
    if exc.errno in (errno.EACCES, errno.EPERM):
        cls = PermissionDenied
    elif exc.errno == errno.ENOENT:
        cls = PathVanished
    elif exc.errno in (errno.ENOTEMPTY, errno.EEXIST) and operation == "remove":
        cls = NotEmpty
    else:
        cls = ObliterationError

    reason = exc.strerror or str(exc)
    return cls(path, reason, current_path=current_path, step=step, operation=operation)
