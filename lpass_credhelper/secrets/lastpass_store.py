"""LastPass credential store backed by the `lpass` CLI.

Entries live in a single namespace folder as "<namespace>/<host>", each
holding the registry URL, the username and the password.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

from lpass_credhelper.adapters.lpass_runner import ProcessRunner
from lpass_credhelper.core.session import LpassSession
from lpass_credhelper.models.credential import Credential
from lpass_credhelper.secrets.base import (
    CredentialStore,
    EntryNotFoundError,
    ExternalToolError,
    InvalidArgumentError,
    require_server_url,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "Docker Credentials"
DEFAULT_LIST_FORMAT = "%ai"

_NOT_FOUND_MARKERS = ("could not find specified account",)


def domain_in_url(server_url: str) -> str:
    raw = server_url.strip()
    if "://" not in raw and not raw.startswith("//"):
        raw = "//" + raw
    try:
        host = urlsplit(raw).hostname
    except ValueError as exc:
        raise InvalidArgumentError(f"invalid server url {server_url!r}: {exc}") from exc
    if not host:
        raise InvalidArgumentError(f"invalid server url {server_url!r}: no host")
    return host


def entry_path(namespace: str, server_url: str) -> str:
    return f"{namespace}/{domain_in_url(server_url)}"


def format_details(credential: Credential) -> str:
    return (
        f"URL: {credential.server_url}\n"
        f"Username: {credential.username}\n"
        f"Password: {credential.secret}\n"
    )


class LastPassStore(CredentialStore):
    def __init__(
        self,
        runner: ProcessRunner,
        session: LpassSession,
        namespace: str = DEFAULT_NAMESPACE,
        list_format: str = DEFAULT_LIST_FORMAT,
    ) -> None:
        self._runner = runner
        self._session = session
        self._namespace = namespace
        self._list_format = list_format

    @property
    def namespace(self) -> str:
        return self._namespace

    def entry_path(self, server_url: str) -> str:
        return entry_path(self._namespace, server_url)

    def get(self, server_url: str) -> tuple[str, str]:
        path = self.entry_path(require_server_url(server_url))
        self._session.ensure_initialized()

        username = self._show("--user", path)
        secret = self._show("--pass", path)
        return username, secret

    def add(self, credential: Optional[Credential]) -> None:
        if credential is None:
            raise InvalidArgumentError("missing credentials")
        path = self.entry_path(require_server_url(credential.server_url))
        self._session.ensure_initialized()

        details = format_details(credential)
        try:
            self.get(credential.server_url)
        except EntryNotFoundError:
            LOGGER.debug("creating entry %s", path)
            self._runner.run(details, "add", "--non-interactive", path)
            return

        LOGGER.debug("updating entry %s", path)
        self._runner.run(details, "edit", "--non-interactive", path)

    def delete(self, server_url: str) -> None:
        path = self.entry_path(require_server_url(server_url))
        self._session.ensure_initialized()

        # TODO: resolve the numeric entry id with `ls` when `rm` rejects path-style names.
        LOGGER.debug("removing entry %s", path)
        self._runner.run("", "rm", path)

    def list(self) -> dict[str, str]:
        self._session.ensure_initialized()

        output = self._runner.run("", "ls", "--format", self._list_format, self._namespace)
        if output == "":
            return {}

        resp: dict[str, str] = {}
        # Fail fast: one unreadable entry fails the whole listing.
        for entry_id in output.split("\n"):
            server_url = self._show("--url", entry_id)
            username = self._show("--user", entry_id)
            resp[server_url] = username
        return resp

    def _show(self, field_flag: str, entry: str) -> str:
        try:
            return self._runner.run("", "show", field_flag, entry)
        except ExternalToolError as exc:
            if _is_not_found(exc):
                raise EntryNotFoundError(str(exc), returncode=exc.returncode, stderr=exc.stderr) from exc
            raise


def _is_not_found(exc: ExternalToolError) -> bool:
    detail = (exc.stderr or str(exc)).lower()
    return any(marker in detail for marker in _NOT_FOUND_MARKERS)
