from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from lead_intake.settings import CORS_MODES

ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type"]

logger = logging.getLogger("lead_intake.cors")


@dataclass(frozen=True)
class CorsPolicy:
    mode: str
    allowed_origins: tuple[str, ...]

    @property
    def is_strict(self) -> bool:
        return self.mode == "strict"

    def is_listed(self, origin: str) -> bool:
        return origin in self.allowed_origins


def build_cors_policy(*, mode: str, allowed_origins: tuple[str, ...]) -> CorsPolicy:
    if mode in CORS_MODES:
        return CorsPolicy(mode=mode, allowed_origins=allowed_origins)

    supported = ", ".join(CORS_MODES)
    raise ValueError(f"Unsupported CORS mode '{mode}'. Supported modes: {supported}")


def install_cors(app: FastAPI, policy: CorsPolicy) -> None:
    """Attach CORS handling.

    Strict mode answers only listed origins. Permissive mode answers every
    origin and logs a warning for each request from an unlisted one.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(policy.allowed_origins),
        allow_origin_regex=None if policy.is_strict else r".*",
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
    )

    if policy.is_strict:
        return

    # Registered last so it wraps CORSMiddleware and also sees preflights.
    @app.middleware("http")
    async def audit_unlisted_origin(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        origin = request.headers.get("origin")
        if origin and not policy.is_listed(origin):
            logger.warning("cors origin not in allowlist", extra={"origin": origin})
        return await call_next(request)
