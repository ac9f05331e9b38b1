from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Literal

from lead_intake.domain.clock import Clock, local_clock_string, utc_now
from lead_intake.domain.contracts import SheetStore
from lead_intake.domain.errors import StoreError, SubmissionRejectedError
from lead_intake.domain.models import CanonicalRow, SubmissionInput, rows_range
from lead_intake.domain.rejections import RejectionReason
from lead_intake.domain.validation import validate_and_normalize

COMPONENT_ID = "domain.lead.submit"

SubmissionState = Literal["rejected", "stored", "store_failed"]

logger = logging.getLogger("lead_intake.submissions")


@dataclass(frozen=True)
class SubmissionOutcome:
    state: SubmissionState
    row: CanonicalRow | None = None
    reason: RejectionReason | None = None
    error: StoreError | None = None


async def submit_lead(
    raw: Mapping[str, object],
    *,
    store: SheetStore,
    sheet_name: str,
    clock: Clock = utc_now,
) -> SubmissionOutcome:
    try:
        fields = validate_and_normalize(SubmissionInput.from_mapping(raw), clock=clock)
    except SubmissionRejectedError as exc:
        logger.warning("lead rejected", extra={"reason": exc.reason.value})
        return SubmissionOutcome(state="rejected", reason=exc.reason)

    row = CanonicalRow(fields=fields, submitted_at_local=local_clock_string(clock()))
    try:
        await asyncio.to_thread(
            store.append_rows,
            range_spec=rows_range(sheet_name),
            rows=[row.as_values()],
        )
    except StoreError as exc:
        logger.error(
            "lead store failed",
            extra={"form_type": fields.form_type, "code": exc.code, "details": exc.message},
        )
        return SubmissionOutcome(state="store_failed", row=row, error=exc)

    logger.info("lead stored", extra={"form_type": fields.form_type})
    return SubmissionOutcome(state="stored", row=row)
