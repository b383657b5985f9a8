"""Credential store abstractions and error taxonomy.

Every failure raised by a store operation derives from CredentialStoreError
so the entrypoint can report it uniformly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from lpass_credhelper.models.credential import Credential


class CredentialStoreError(RuntimeError):
    """Raised when a credential operation cannot be completed."""


class InvalidArgumentError(CredentialStoreError):
    """Missing or unparseable server URL, or missing credentials."""


class ExternalToolError(CredentialStoreError):
    """The external tool could not be spawned or exited non-zero."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class EntryNotFoundError(ExternalToolError):
    """A lookup failed because the entry does not exist; carries the tool's text."""


class LoginFailedError(CredentialStoreError):
    """The interactive login subcommand failed."""

    def __init__(self, message: str, username: str) -> None:
        super().__init__(message)
        self.username = username


class NotInitializedError(CredentialStoreError):
    """The external tool is still not authenticated after login."""


class CredentialStore(ABC):
    """Four-operation credential helper contract keyed by server URL."""

    @abstractmethod
    def get(self, server_url: str) -> tuple[str, str]:
        """Return (username, secret) stored for server_url."""

    @abstractmethod
    def add(self, credential: Optional[Credential]) -> None:
        """Create or update the entry for credential.server_url."""

    @abstractmethod
    def delete(self, server_url: str) -> None:
        """Remove the entry for server_url."""

    @abstractmethod
    def list(self) -> dict[str, str]:
        """Return a mapping of server URL to username for every managed entry."""


def require_server_url(server_url: Optional[str]) -> str:
    if not server_url:
        raise InvalidArgumentError("missing server url")
    return server_url
