from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import uuid

from dotenv import load_dotenv
from fastapi import FastAPI
import uvicorn

from lead_intake.api.http_app import SERVICE_NAME, build_app
from lead_intake.domain.errors import ConfigurationError, StoreError
from lead_intake.domain.use_cases.prepare_sheet import prepare_store
from lead_intake.logging_setup import configure_logging
from lead_intake.services.bootstrap import build_runtime_container
from lead_intake.settings import AppSettings, settings_from_env


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Lead intake API")
    parser.add_argument("--host", default=None, help="Bind address (default: APP_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Listen port (default: PORT or 5000)")
    parser.add_argument(
        "--dry-run-startup",
        action="store_true",
        help="Validate configuration and exit",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable code reload (dev mode)",
    )
    return parser.parse_args(argv)


def create_runtime_app() -> FastAPI:
    load_dotenv()
    configure_logging()
    try:
        settings = settings_from_env()
    except ConfigurationError as exc:
        sys.stderr.write(f"ERROR: {exc}\n")
        raise SystemExit(2) from exc
    run_id = str(uuid.uuid4())
    container = build_runtime_container(settings)

    async def on_startup() -> None:
        await asyncio.to_thread(prepare_store, container.store, sheet_name=settings.sheet_name)

    return build_app(api_deps=container.api_deps, run_id=run_id, on_startup=on_startup)


def run(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    load_dotenv()
    configure_logging()
    try:
        settings = settings_from_env()
    except ConfigurationError as exc:
        sys.stderr.write(f"ERROR: {exc}\n")
        return 2

    run_id = str(uuid.uuid4())
    logger = logging.getLogger("runtime")
    logger.info("runtime initialized", extra={"service": SERVICE_NAME, "run_id": run_id})

    if args.dry_run_startup:
        logger.info("dry-run startup complete", extra={"service": SERVICE_NAME, "run_id": run_id})
        return 0

    host = args.host or settings.host
    port = args.port if args.port is not None else settings.port
    if args.reload:
        uvicorn.run(
            "lead_intake.main:create_runtime_app",
            host=host,
            port=port,
            log_level="warning",
            reload=True,
            factory=True,
        )
        return 0

    try:
        container = build_runtime_container(settings)
        prepare_store(container.store, sheet_name=settings.sheet_name)
    except StoreError as exc:
        logger.error(
            "cannot start server without sheet connection",
            extra={"service": SERVICE_NAME, "run_id": run_id, "details": exc.message},
        )
        return 1

    _log_endpoints(logger, settings=settings, port=port, run_id=run_id)
    app = build_app(api_deps=container.api_deps, run_id=run_id)
    uvicorn.run(app, host=host, port=port, log_level="warning")
    return 0


def _log_endpoints(logger: logging.Logger, *, settings: AppSettings, port: int, run_id: str) -> None:
    base = f"http://localhost:{port}"
    extra = {"service": SERVICE_NAME, "run_id": run_id}
    logger.info("server listening", extra={**extra, "url": base})
    if settings.store_backend == "google":
        logger.info("lead sheet", extra={**extra, "url": settings.sheet_url})
    for label, path in (
        ("connection test", "/api/test"),
        ("health", "/health"),
        ("submit form", "/api/submit-form"),
    ):
        logger.info(label, extra={**extra, "url": f"{base}{path}"})


if __name__ == "__main__":
    raise SystemExit(run())
