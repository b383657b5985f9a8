"""Settings loader for the lpass credential helper."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from lpass_credhelper.core.session import DEFAULT_LOGIN_PROMPT
from lpass_credhelper.secrets.lastpass_store import DEFAULT_LIST_FORMAT, DEFAULT_NAMESPACE


@dataclass(frozen=True)
class LpassConfig:
    command: str = "lpass"


@dataclass(frozen=True)
class StoreConfig:
    namespace: str = DEFAULT_NAMESPACE
    list_format: str = DEFAULT_LIST_FORMAT


@dataclass(frozen=True)
class LoginConfig:
    prompt: str = DEFAULT_LOGIN_PROMPT


@dataclass(frozen=True)
class HelperSettings:
    lpass: LpassConfig = field(default_factory=LpassConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    login: LoginConfig = field(default_factory=LoginConfig)


class SettingsLoadError(RuntimeError):
    """Raised when settings cannot be loaded."""


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SettingsLoadError(f"{key} must be an object")
    return value


def _non_empty(section: dict[str, Any], key: str, default: str, label: str) -> str:
    value = str(section.get(key, default)).strip()
    if not value:
        raise SettingsLoadError(f"{label} must not be empty")
    return value


def load_settings(path: Optional[Path] = None) -> HelperSettings:
    if path is None:
        return HelperSettings()
    if not path.exists():
        raise SettingsLoadError(f"settings file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise SettingsLoadError(f"settings file is not valid YAML: {path}") from exc
    if raw is None:
        return HelperSettings()
    if not isinstance(raw, dict):
        raise SettingsLoadError("settings root must be an object")

    lpass_raw = _section(raw, "lpass")
    store_raw = _section(raw, "store")
    login_raw = _section(raw, "login")

    command = _non_empty(lpass_raw, "command", "lpass", "lpass.command")
    # Keep the transport fixed to the lpass binary (no arbitrary command path).
    if "lpass" not in Path(command).name.lower():
        raise SettingsLoadError("lpass.command must point to lpass CLI")

    namespace = _non_empty(store_raw, "namespace", DEFAULT_NAMESPACE, "store.namespace").strip("/")
    if not namespace:
        raise SettingsLoadError("store.namespace must not be empty")

    prompt = str(login_raw.get("prompt", DEFAULT_LOGIN_PROMPT))
    if "\n" in prompt:
        raise SettingsLoadError("login.prompt must be single-line")

    return HelperSettings(
        lpass=LpassConfig(command=command),
        store=StoreConfig(
            namespace=namespace,
            list_format=_non_empty(store_raw, "list_format", DEFAULT_LIST_FORMAT, "store.list_format"),
        ),
        login=LoginConfig(prompt=prompt),
    )
