from __future__ import annotations

import asyncio
from collections.abc import Mapping
import logging
from typing import cast

from lead_intake.api.errors import ApiError
from lead_intake.api.handlers.deps import ApiDeps
from lead_intake.api.schemas import ErrorResponse, LeadEcho, SubmissionsResponse, SubmitFormResponse
from lead_intake.domain.errors import StoreError
from lead_intake.domain.models import CanonicalRow, rows_range
from lead_intake.domain.rejections import rejection_message
from lead_intake.domain.use_cases.submit_lead import submit_lead

COMPONENT_ID_SUBMIT = "api.submit_form"
COMPONENT_ID_LIST = "api.list_submissions"

SUBMIT_FAILED_MESSAGE = "Failed to submit form. Please try again later."
LIST_FAILED_MESSAGE = "Failed to fetch submissions"

logger = logging.getLogger("lead_intake.submissions")


async def submit_form_handler(*, payload: Mapping[str, object], api_deps: ApiDeps) -> SubmitFormResponse:
    outcome = await submit_lead(
        payload,
        store=api_deps.store,
        sheet_name=api_deps.settings.sheet_name,
        clock=api_deps.clock,
    )

    if outcome.reason is not None:
        raise ApiError(status_code=400, body=ErrorResponse(error=rejection_message(outcome.reason)))

    if outcome.error is not None:
        raise ApiError(
            status_code=500,
            body=ErrorResponse(
                error=SUBMIT_FAILED_MESSAGE,
                details=outcome.error.message,
                code=outcome.error.code,
            ),
        )

    fields = cast(CanonicalRow, outcome.row).fields
    return SubmitFormResponse(
        message="Form submitted successfully",
        data=LeadEcho(name=fields.name, email=fields.email, phone=fields.phone, form_type=fields.form_type),
    )


async def list_submissions_handler(*, api_deps: ApiDeps) -> SubmissionsResponse:
    range_spec = rows_range(api_deps.settings.sheet_name)
    try:
        rows = await asyncio.to_thread(api_deps.store.read_range, range_spec=range_spec)
    except StoreError as exc:
        logger.error("submissions readback failed", extra={"code": exc.code, "details": exc.message})
        raise ApiError(
            status_code=500,
            body=ErrorResponse(error=LIST_FAILED_MESSAGE, details=exc.message),
        ) from exc
    return SubmissionsResponse(data=rows or [])
