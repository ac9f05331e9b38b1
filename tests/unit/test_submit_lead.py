import asyncio
from datetime import UTC, datetime
import logging

import pytest

from lead_intake.clients.stub import InMemorySheetStore
from lead_intake.domain.errors import StoreError
from lead_intake.domain.rejections import RejectionReason
from lead_intake.domain.use_cases.submit_lead import COMPONENT_ID, submit_lead

SHEET = "Leads"
FIXED_NOW = datetime(2026, 10, 17, 6, 15, tzinfo=UTC)


def _fixed_clock() -> datetime:
    return FIXED_NOW


def _submit(raw: dict[str, object], store: InMemorySheetStore):
    return asyncio.run(submit_lead(raw, store=store, sheet_name=SHEET, clock=_fixed_clock))


@pytest.mark.unit
def test_component_id_is_stable() -> None:
    assert COMPONENT_ID == "domain.lead.submit"


@pytest.mark.unit
def test_valid_submission_appends_canonical_row() -> None:
    store = InMemorySheetStore()

    outcome = _submit({"name": "A", "email": "a@b.com", "phone": "+91 98765 43210"}, store)

    assert outcome.state == "stored"
    assert store.appends == [
        (
            "'Leads'!A:I",
            [
                [
                    "2026-10-17T06:15:00.000Z",
                    "A",
                    "a@b.com",
                    "9876543210",
                    "Not specified",
                    "",
                    "general",
                    "website",
                    "17/10/2026, 11:45:00 am",
                ]
            ],
        )
    ]


@pytest.mark.unit
def test_rejected_submission_never_touches_store() -> None:
    store = InMemorySheetStore(fail_with=StoreError("store must not be called"))

    outcome = _submit({"name": "A", "email": "a@b.com", "phone": "12345"}, store)

    assert outcome.state == "rejected"
    assert outcome.reason == RejectionReason.INVALID_PHONE_LENGTH
    assert outcome.row is None
    assert store.appends == []


@pytest.mark.unit
def test_store_failure_is_reported_verbatim() -> None:
    store = InMemorySheetStore(fail_appends_with=StoreError("Quota exceeded for quota metric", code=429))

    outcome = _submit({"name": "A", "email": "a@b.com", "phone": "9876543210"}, store)

    assert outcome.state == "store_failed"
    assert outcome.error is not None
    assert outcome.error.message == "Quota exceeded for quota metric"
    assert outcome.error.code == 429
    assert store.rows == []


@pytest.mark.unit
def test_outcomes_are_logged_without_contact_details(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="lead_intake.submissions")
    store = InMemorySheetStore()

    _submit({"name": "A", "email": "a@b.com", "phone": "9876543210", "formType": "brochure"}, store)
    _submit({"name": "A", "email": "bad", "phone": "9876543210"}, store)

    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["lead stored", "lead rejected"]
    assert caplog.records[0].form_type == "brochure"
    assert caplog.records[1].reason == "invalid_email_format"
    assert "a@b.com" not in caplog.text
    assert "9876543210" not in caplog.text
