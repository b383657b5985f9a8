"""Credential store factory."""

from __future__ import annotations

from typing import Optional, TextIO

from lpass_credhelper.adapters.lpass_runner import LpassRunner, ProcessRunner
from lpass_credhelper.config.settings import HelperSettings
from lpass_credhelper.core.session import LpassSession
from lpass_credhelper.secrets.base import CredentialStore
from lpass_credhelper.secrets.lastpass_store import LastPassStore


def create_credential_store(
    settings: HelperSettings,
    runner: Optional[ProcessRunner] = None,
    input_stream: Optional[TextIO] = None,
    prompt_stream: Optional[TextIO] = None,
) -> CredentialStore:
    runner = runner or LpassRunner(command=settings.lpass.command)
    session = LpassSession(
        runner=runner,
        prompt=settings.login.prompt,
        input_stream=input_stream,
        prompt_stream=prompt_stream,
    )
    return LastPassStore(
        runner=runner,
        session=session,
        namespace=settings.store.namespace,
        list_format=settings.store.list_format,
    )
