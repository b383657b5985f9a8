"""lpass session guard.

The guard makes sure lpass is logged in exactly once per session object
before any store operation runs. Concurrent first callers are serialized on
a lock held for the whole check, so the interactive login happens at most
once and the status probe runs at most twice.
"""

from __future__ import annotations

import logging
import sys
import threading
from enum import Enum
from typing import Optional, TextIO

from lpass_credhelper.adapters.lpass_runner import ProcessRunner
from lpass_credhelper.secrets.base import ExternalToolError, LoginFailedError, NotInitializedError

LOGGER = logging.getLogger(__name__)

DEFAULT_LOGIN_PROMPT = "Enter your LastPass username: "


class SessionState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    INITIALIZED = "INITIALIZED"


class LpassSession:
    def __init__(
        self,
        runner: ProcessRunner,
        prompt: str = DEFAULT_LOGIN_PROMPT,
        input_stream: Optional[TextIO] = None,
        prompt_stream: Optional[TextIO] = None,
    ) -> None:
        self._runner = runner
        self._prompt = prompt
        self._input_stream = input_stream
        self._prompt_stream = prompt_stream
        self._lock = threading.Lock()
        self._state = SessionState.UNINITIALIZED

    @property
    def state(self) -> SessionState:
        return self._state

    def ensure_initialized(self) -> None:
        with self._lock:
            if self._state is SessionState.INITIALIZED:
                return

            try:
                self._probe()
            except ExternalToolError as exc:
                LOGGER.info("lpass is not logged in: %s", exc)
                self._login()

            try:
                self._probe()
            except ExternalToolError as exc:
                raise NotInitializedError(f"lpass not initialized: {exc}") from exc

            self._state = SessionState.INITIALIZED
            LOGGER.debug("lpass session initialized")

    def _probe(self) -> None:
        self._runner.run("", "status", "--quiet")

    def _login(self) -> None:
        username = self._read_username()
        if not username:
            raise LoginFailedError(
                "Failed to log into `lpass`; no username given. "
                "Run `lpass login <username>` first when stdin carries the helper request.",
                username=username,
            )

        status = self._runner.run_interactive("login", username)
        if status != 0:
            raise LoginFailedError(
                f"Failed to log into `lpass`; try running `lpass login {username}` yourself.",
                username=username,
            )

    def _read_username(self) -> str:
        prompt_stream = self._prompt_stream or sys.stderr
        input_stream = self._input_stream or sys.stdin
        prompt_stream.write(self._prompt)
        prompt_stream.flush()
        return input_stream.readline().strip()
