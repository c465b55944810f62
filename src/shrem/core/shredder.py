from __future__ import annotations

"""
External Content Shredder Boundary.

Delegates overwrite, name shrinking and unlinking of regular files to GNU
'shred'. This module only builds the command line, runs it synchronously and
interprets its verbose output; the overwrite algorithm itself stays inside
the external tool.
"""

import logging
import re
import subprocess
from typing import List, Optional

from shrem.core.obliterator import Reporter
from shrem.domain.config import DEFAULT_PASSES, DEFAULT_SHRED_COMMAND
from shrem.domain.errors import ExternalToolFailure, PathVanished
from shrem.domain.models import ShredReport

logger = logging.getLogger(__name__)

# "shred: a/b/file: renamed to a/b/0000"
_RENAMED_RX = re.compile(r": renamed to (?P<target>.+)$")


class ContentShredInvoker:
    """
    Run the external shredder on one regular file at a time.

    Args:
        passes: Overwrite passes requested from the tool ('-n').
        zero_pass: Ask for a final pass of zeros ('-z').
        command: Executable name or path.
        reporter: Receives the tool's progress lines when given.
    """

    def __init__(
            self,
            passes: int = DEFAULT_PASSES,
            zero_pass: bool = True,
            command: str = DEFAULT_SHRED_COMMAND,
            reporter: Optional[Reporter] = None,
    ) -> None:
        self.passes = passes
        self.zero_pass = zero_pass
        self.command = command
        self.reporter = reporter

    def build_command(self, path: str) -> List[str]:
        cmd = [self.command, "-v", "-u"]
        if self.zero_pass:
            cmd.append("-z")
        cmd.extend(["-n", str(self.passes), "--", path])
        return cmd

    def shred_file(self, path: str) -> ShredReport:
        """
        Overwrite, shrink-rename and unlink *path* through the external tool.

        Args:
            path: Regular file to destroy.

        Returns:
            ShredReport: The tool's progress lines and last reported name.

        Raises:
            ExternalToolFailure: The tool is missing or exited non-zero. The
                error names the last intermediate name the tool reported.
            PathVanished: The file no longer existed when the tool ran.
        """
        cmd = self.build_command(path)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise ExternalToolFailure(
                path, f"shred command not found: {self.command}", operation="shred"
            ) from e
        except OSError as e:
            raise ExternalToolFailure(path, str(e), operation="shred") from e

        # shred writes its verbose progress to stderr
        lines = [ln for ln in (proc.stderr or "").splitlines() if ln.strip()]
        lines.extend(ln for ln in (proc.stdout or "").splitlines() if ln.strip())

        if self.reporter:
            for line in lines:
                self.reporter(line)

        final_name = _last_renamed_name(lines) or path

        if proc.returncode != 0:
            reason = lines[-1] if lines else f"exit status {proc.returncode}"
            if "No such file or directory" in reason and final_name == path:
                raise PathVanished(path, reason, operation="shred")
            raise ExternalToolFailure(
                path,
                reason,
                current_path=final_name,
                operation="shred",
            )

        return ShredReport(path=path, lines=lines, final_name=final_name)


def _last_renamed_name(lines: List[str]) -> str:
    for line in reversed(lines):
        m = _RENAMED_RX.search(line)
        if m:
            return m.group("target")
    return ""
