from __future__ import annotations

import asyncio
import logging

from lead_intake.api.errors import ApiError
from lead_intake.api.handlers.deps import ApiDeps
from lead_intake.api.schemas import (
    ConnectionTestResponse,
    EndpointIndex,
    ErrorResponse,
    HealthResponse,
    IndexResponse,
)
from lead_intake.domain.clock import iso_instant
from lead_intake.domain.errors import StoreError
from lead_intake.domain.models import preview_range

COMPONENT_ID_HEALTH = "api.health"
COMPONENT_ID_INDEX = "api.index"
COMPONENT_ID_CONNECTION_TEST = "api.connection_test"

CONNECTION_FAILED_MESSAGE = "Google Sheets connection failed"

logger = logging.getLogger("lead_intake.sheets")


async def health_handler(*, api_deps: ApiDeps) -> HealthResponse:
    return HealthResponse(
        status="OK",
        project=api_deps.settings.project_name,
        message="Server is running",
        timestamp=iso_instant(api_deps.clock()),
    )


async def index_handler(*, api_deps: ApiDeps) -> IndexResponse:
    return IndexResponse(
        project=f"{api_deps.settings.project_name} API",
        version=api_deps.settings.api_version,
        endpoints=EndpointIndex(),
    )


async def connection_test_handler(*, api_deps: ApiDeps) -> ConnectionTestResponse:
    """Read the first rows of the lead sheet to prove the store is reachable."""
    range_spec = preview_range(api_deps.settings.sheet_name)
    try:
        rows = await asyncio.to_thread(api_deps.store.read_range, range_spec=range_spec)
    except StoreError as exc:
        logger.error("sheet connection test failed", extra={"code": exc.code, "details": exc.message})
        raise ApiError(
            status_code=500,
            body=ErrorResponse(error=CONNECTION_FAILED_MESSAGE, details=exc.message),
        ) from exc
    return ConnectionTestResponse(message="Google Sheets connection successful", data=rows or [])
