from dataclasses import dataclass, field
from typing import Any

import pytest

from lead_intake import main
from lead_intake.clients.stub import InMemorySheetStore
from lead_intake.domain.errors import StoreError
from lead_intake.services.bootstrap import build_runtime_container
from lead_intake.settings import AppSettings

ENV_KEYS = (
    "GOOGLE_SHEET_ID",
    "GOOGLE_CLIENT_EMAIL",
    "GOOGLE_PRIVATE_KEY",
    "GOOGLE_SHEET_NAME",
    "STORE_BACKEND",
    "CORS_MODE",
    "PORT",
)


@dataclass
class UvicornRecorder:
    calls: list[tuple[Any, dict[str, Any]]] = field(default_factory=list)

    def run(self, app: Any, **kwargs: Any) -> None:
        self.calls.append((app, kwargs))


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(main, "load_dotenv", lambda: False)
    return monkeypatch


@pytest.mark.unit
def test_cli_returns_non_zero_for_missing_configuration(
    clean_env: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = main.run(["--dry-run-startup"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "ERROR: GOOGLE_SHEET_ID is not set" in captured.err


@pytest.mark.unit
def test_cli_dry_run_succeeds_with_configuration(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("GOOGLE_SHEET_ID", "sheet-1")
    clean_env.setenv("GOOGLE_CLIENT_EMAIL", "svc@project.iam.gserviceaccount.com")
    clean_env.setenv("GOOGLE_PRIVATE_KEY", "unused-in-dry-run")

    assert main.run(["--dry-run-startup"]) == 0


@pytest.mark.unit
def test_cli_refuses_to_serve_when_store_is_unreachable(clean_env: pytest.MonkeyPatch) -> None:
    recorder = UvicornRecorder()
    clean_env.setattr(main.uvicorn, "run", recorder.run)
    clean_env.setenv("STORE_BACKEND", "memory")

    def failing_container(settings: AppSettings):
        store = InMemorySheetStore(fail_with=StoreError("Requested entity was not found.", code=404))
        return build_runtime_container(settings, store=store)

    clean_env.setattr(main, "build_runtime_container", failing_container)

    assert main.run([]) == 1
    assert recorder.calls == []


@pytest.mark.unit
def test_cli_prepares_sheet_and_serves(clean_env: pytest.MonkeyPatch) -> None:
    recorder = UvicornRecorder()
    store = InMemorySheetStore()
    clean_env.setattr(main.uvicorn, "run", recorder.run)
    clean_env.setenv("STORE_BACKEND", "memory")
    clean_env.setenv("PORT", "8080")
    clean_env.setattr(
        main,
        "build_runtime_container",
        lambda settings: build_runtime_container(settings, store=store),
    )

    assert main.run(["--host", "127.0.0.1"]) == 0

    assert store.rows[0][0] == "Timestamp"
    assert len(recorder.calls) == 1
    _, kwargs = recorder.calls[0]
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8080


@pytest.mark.unit
def test_reload_factory_exits_with_config_error(
    clean_env: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main.create_runtime_app()
    captured = capsys.readouterr()

    assert exc_info.value.code == 2
    assert "ERROR: GOOGLE_SHEET_ID is not set" in captured.err


@pytest.mark.unit
def test_reload_factory_builds_app_with_memory_backend(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("STORE_BACKEND", "memory")

    app = main.create_runtime_app()

    assert app.title == "Godrej Arden API"
