"""lpass CLI process runner.

Every call spawns one `lpass` process and blocks until it exits. There is
no timeout and no retry: a hung lpass hangs the caller.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import Protocol

from lpass_credhelper.secrets.base import ExternalToolError

LOGGER = logging.getLogger(__name__)


class ProcessRunner(Protocol):
    def run(self, stdin_text: str, *args: str) -> str:
        """Run the tool with piped input and return its trimmed stdout."""

    def run_interactive(self, *args: str) -> int:
        """Run the tool attached to the terminal and return its exit status."""


class LpassRunner:
    def __init__(self, command: str = "lpass") -> None:
        self._command = command

    def run(self, stdin_text: str, *args: str) -> str:
        cmd = [self._command, *args]
        LOGGER.debug("running %s", " ".join(cmd[:2]))
        try:
            proc = subprocess.run(
                cmd,
                input=stdin_text,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise ExternalToolError(str(exc)) from exc

        if proc.returncode != 0:
            stderr = proc.stderr or ""
            raise ExternalToolError(
                f"exit status {proc.returncode}: {stderr}",
                returncode=proc.returncode,
                stderr=stderr,
            )
        return self._strip_terminator(proc.stdout or "")

    def run_interactive(self, *args: str) -> int:
        cmd = [self._command, *args]
        LOGGER.debug("running interactive %s", cmd[1] if len(cmd) > 1 else cmd[0])
        try:
            # stdout goes to stderr so the helper's protocol output stays clean.
            proc = subprocess.run(cmd, stdout=sys.stderr, check=False)
        except OSError as exc:
            raise ExternalToolError(str(exc)) from exc
        return proc.returncode

    @staticmethod
    def _strip_terminator(text: str) -> str:
        # lpass always appends exactly one newline to its output.
        if text.endswith("\n"):
            return text[:-1]
        return text
