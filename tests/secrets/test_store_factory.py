from lpass_credhelper.config.settings import HelperSettings, StoreConfig
from lpass_credhelper.secrets.factory import create_credential_store
from lpass_credhelper.secrets.lastpass_store import LastPassStore


class _RecordingRunner:
    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []

    def run(self, stdin_text: str, *args: str) -> str:
        self.calls.append(args)
        return ""

    def run_interactive(self, *args: str) -> int:
        self.calls.append(args)
        return 0


def test_factory_builds_lastpass_store() -> None:
    store = create_credential_store(HelperSettings())
    assert isinstance(store, LastPassStore)
    assert store.namespace == "Docker Credentials"


def test_factory_uses_configured_namespace() -> None:
    runner = _RecordingRunner()
    settings = HelperSettings(store=StoreConfig(namespace="Registries", list_format="%ai"))
    store = create_credential_store(settings, runner=runner)

    assert store.list() == {}
    assert runner.calls[-1] == ("ls", "--format", "%ai", "Registries")
