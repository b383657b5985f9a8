"""lpass credential helper entrypoint.

Speaks the Docker credential-helper protocol: the action is the single
argument, the request is read from stdin and the response is written to
stdout. Errors are written to stdout as plain text with exit status 1.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional, TextIO

from pydantic import ValidationError

from lpass_credhelper.config.settings import SettingsLoadError, load_settings
from lpass_credhelper.models.credential import Credential
from lpass_credhelper.secrets.base import CredentialStore, CredentialStoreError, EntryNotFoundError
from lpass_credhelper.secrets.factory import create_credential_store

PACKAGE_NAME = "lpass-credhelper"
CREDENTIALS_NOT_FOUND = "credentials not found in native keychain"
ACTIONS = ("get", "store", "erase", "list", "version")

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _package_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "unknown"


def _default_config_path() -> Path:
    return Path(__file__).resolve().parents[1] / "config" / "helper.yaml"


def _resolve_config_path(raw: Optional[str]) -> Optional[Path]:
    value = (raw or os.getenv("LPASS_CREDHELPER_CONFIG", "")).strip()
    if value:
        return Path(value)
    default_path = _default_config_path()
    if default_path.exists():
        return default_path
    return None


def run_action(action: str, store: CredentialStore, stdin: TextIO, stdout: TextIO) -> None:
    if action == "store":
        credential = Credential.model_validate(json.loads(stdin.read()))
        store.add(credential)
    elif action == "get":
        server_url = stdin.readline().strip()
        try:
            username, secret = store.get(server_url)
        except EntryNotFoundError as exc:
            LOGGER.debug("lookup failed: %s", exc)
            raise CredentialStoreError(CREDENTIALS_NOT_FOUND) from exc
        payload = Credential(server_url=server_url, username=username, secret=secret)
        stdout.write(json.dumps(payload.to_wire()) + "\n")
    elif action == "erase":
        store.delete(stdin.readline().strip())
    elif action == "list":
        stdout.write(json.dumps(store.list()) + "\n")
    else:
        raise ValueError(f"unknown action: {action}")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Docker credential helper backed by the lpass CLI")
    parser.add_argument("action", help="one of: " + ", ".join(ACTIONS))
    parser.add_argument("--config", help="settings YAML (default: $LPASS_CREDHELPER_CONFIG, then config/helper.yaml, then built-in)")
    parser.add_argument("--verbose", action="store_true", help="debug logging on stderr")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose or os.getenv("LPASS_CREDHELPER_DEBUG", "") == "1")

    if args.action == "version":
        print(f"{PACKAGE_NAME} {_package_version()}")
        return 0
    if args.action not in ACTIONS:
        print(f"Usage: lpass-credhelper <{'|'.join(ACTIONS)}>")
        return 1

    try:
        settings = load_settings(_resolve_config_path(args.config))
    except SettingsLoadError as exc:
        LOGGER.error("startup blocked by invalid settings: %s", exc)
        print(f"invalid settings: {exc}")
        return 1

    store = create_credential_store(settings)
    try:
        run_action(args.action, store, sys.stdin, sys.stdout)
    except (CredentialStoreError, ValidationError, json.JSONDecodeError) as exc:
        LOGGER.debug("%s failed: %s", args.action, exc)
        print(str(exc).strip())
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
