from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import Awaitable, Callable
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lead_intake.api.cors import build_cors_policy, install_cors
from lead_intake.api.errors import ApiError
from lead_intake.api.handlers.deps import ApiDeps
from lead_intake.api.handlers.status import connection_test_handler, health_handler, index_handler
from lead_intake.api.handlers.submissions import list_submissions_handler, submit_form_handler
from lead_intake.api.schemas import (
    ConnectionTestResponse,
    ErrorResponse,
    HealthResponse,
    IndexResponse,
    SubmissionsResponse,
    SubmitFormRequest,
    SubmitFormResponse,
)

SERVICE_NAME = "lead-intake"
INVALID_BODY_MESSAGE = "Invalid request body"


def build_app(
    *,
    api_deps: ApiDeps,
    run_id: str,
    on_startup: Callable[[], Awaitable[None]] | None = None,
    on_shutdown: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    logger = logging.getLogger("runtime")
    settings = api_deps.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        del app
        if on_startup is not None:
            await on_startup()

        logger.info(
            "service started",
            extra={"service": SERVICE_NAME, "run_id": run_id},
        )

        yield

        if on_shutdown is not None:
            await on_shutdown()

        logger.info(
            "service stopped",
            extra={"service": SERVICE_NAME, "run_id": run_id},
        )

    app = FastAPI(title=f"{settings.project_name} API", version=settings.api_version, lifespan=lifespan)
    install_cors(
        app,
        build_cors_policy(mode=settings.cors_mode, allowed_origins=settings.cors_allowed_origins),
    )

    @app.exception_handler(ApiError)
    async def api_error(request: Request, exc: ApiError) -> JSONResponse:
        del request
        return JSONResponse(status_code=exc.status_code, content=exc.body.model_dump(exclude_none=True))

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        del request, exc
        body = ErrorResponse(error=INVALID_BODY_MESSAGE)
        return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))

    @app.get("/", response_model=IndexResponse, tags=["System"])
    async def index() -> IndexResponse:
        return await index_handler(api_deps=api_deps)

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return await health_handler(api_deps=api_deps)

    @app.get(
        "/api/test",
        response_model=ConnectionTestResponse,
        responses={500: {"model": ErrorResponse}},
        tags=["System"],
    )
    async def connection_test() -> ConnectionTestResponse:
        return await connection_test_handler(api_deps=api_deps)

    @app.post(
        "/api/submit-form",
        response_model=SubmitFormResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        tags=["Leads"],
    )
    async def submit_form(request: SubmitFormRequest | None = None) -> SubmitFormResponse:
        payload = (request or SubmitFormRequest()).model_dump(by_alias=True)
        return await submit_form_handler(payload=payload, api_deps=api_deps)

    @app.get(
        "/api/submissions",
        response_model=SubmissionsResponse,
        responses={500: {"model": ErrorResponse}},
        tags=["Leads"],
    )
    async def list_submissions() -> SubmissionsResponse:
        return await list_submissions_handler(api_deps=api_deps)

    return app
