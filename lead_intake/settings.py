from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os

from lead_intake.domain.errors import ConfigurationError

DEFAULT_PORT = 5000
DEFAULT_SHEET_NAME = "Godrej Arden Lead Sheet"
DEFAULT_PROJECT_NAME = "Godrej Arden"
DEFAULT_CORS_ORIGINS: tuple[str, ...] = (
    "http://localhost:3000",
    "http://localhost:5173",
    "https://jk-backend-aj.vercel.app",
    "https://godrejarden.in",
)

CORS_MODES = ("strict", "permissive")
STORE_BACKENDS = ("google", "memory")


@dataclass(frozen=True)
class AppSettings:
    sheet_id: str
    client_email: str
    private_key: str = ""
    sheet_name: str = DEFAULT_SHEET_NAME
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    project_name: str = DEFAULT_PROJECT_NAME
    api_version: str = "1.0.0"
    cors_allowed_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    cors_mode: str = "strict"
    store_backend: str = "google"

    @property
    def sheet_url(self) -> str:
        return f"https://docs.google.com/spreadsheets/d/{self.sheet_id}"


def settings_from_env(environ: Mapping[str, str] | None = None) -> AppSettings:
    env = os.environ if environ is None else environ

    store_backend = _choice(env, "STORE_BACKEND", "google", STORE_BACKENDS)
    cors_mode = _choice(env, "CORS_MODE", "strict", CORS_MODES)
    required = store_backend == "google"

    return AppSettings(
        sheet_id=_env_str(env, "GOOGLE_SHEET_ID", required=required),
        client_email=_env_str(env, "GOOGLE_CLIENT_EMAIL", required=required),
        private_key=_env_str(env, "GOOGLE_PRIVATE_KEY", required=required).replace("\\n", "\n"),
        sheet_name=_env_str(env, "GOOGLE_SHEET_NAME") or DEFAULT_SHEET_NAME,
        host=_env_str(env, "APP_HOST") or "0.0.0.0",
        port=_env_int(env, "PORT", DEFAULT_PORT),
        project_name=_env_str(env, "PROJECT_NAME") or DEFAULT_PROJECT_NAME,
        api_version=_env_str(env, "API_VERSION") or "1.0.0",
        cors_allowed_origins=_env_list(env, "CORS_ALLOWED_ORIGINS") or DEFAULT_CORS_ORIGINS,
        cors_mode=cors_mode,
        store_backend=store_backend,
    )


def _env_str(env: Mapping[str, str], name: str, *, required: bool = False) -> str:
    value = env.get(name, "").strip()
    if required and not value:
        raise ConfigurationError(f"{name} is not set")
    return value


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None:
        return default

    try:
        parsed = int(value)
    except ValueError:
        return default

    return parsed if parsed > 0 else default


def _env_list(env: Mapping[str, str], name: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in env.get(name, "").split(",") if item.strip())


def _choice(env: Mapping[str, str], name: str, default: str, allowed: tuple[str, ...]) -> str:
    value = env.get(name, "").strip().lower() or default
    if value in allowed:
        return value

    supported = ", ".join(allowed)
    raise ConfigurationError(f"Unsupported {name} '{value}'. Supported values: {supported}")
