from pathlib import Path

import pytest
import yaml

from lpass_credhelper.config.settings import HelperSettings, SettingsLoadError, load_settings


def test_settings_loader_reads_default_file() -> None:
    settings = load_settings(Path("config/helper.yaml"))
    assert settings.lpass.command == "lpass"
    assert settings.store.namespace == "Docker Credentials"
    assert settings.store.list_format == "%ai"
    assert settings.login.prompt == "Enter your LastPass username: "


def test_settings_loader_without_path_uses_defaults() -> None:
    assert load_settings(None) == HelperSettings()


def test_settings_loader_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SettingsLoadError):
        load_settings(tmp_path / "missing.yaml")


def test_settings_loader_rejects_non_lpass_command(tmp_path: Path) -> None:
    src = yaml.safe_load(Path("config/helper.yaml").read_text(encoding="utf-8"))
    src["lpass"]["command"] = "/bin/sh"

    path = tmp_path / "helper.yaml"
    path.write_text(yaml.safe_dump(src, allow_unicode=False), encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        load_settings(path)


def test_settings_loader_rejects_empty_namespace(tmp_path: Path) -> None:
    src = yaml.safe_load(Path("config/helper.yaml").read_text(encoding="utf-8"))
    src["store"]["namespace"] = "/"

    path = tmp_path / "helper.yaml"
    path.write_text(yaml.safe_dump(src, allow_unicode=False), encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        load_settings(path)


def test_settings_loader_accepts_custom_namespace(tmp_path: Path) -> None:
    path = tmp_path / "helper.yaml"
    path.write_text("store:\n  namespace: Shared-Registries/\n", encoding="utf-8")

    settings = load_settings(path)
    assert settings.store.namespace == "Shared-Registries"
    assert settings.lpass.command == "lpass"
