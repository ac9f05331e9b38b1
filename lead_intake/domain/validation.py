from __future__ import annotations

import re

from lead_intake.domain.clock import Clock, iso_instant, utc_now
from lead_intake.domain.errors import SubmissionRejectedError
from lead_intake.domain.models import (
    DEFAULT_CITY,
    DEFAULT_DETAILS,
    DEFAULT_FORM_TYPE,
    DEFAULT_SOURCE,
    LeadFields,
    SubmissionInput,
)
from lead_intake.domain.rejections import RejectionReason

PHONE_DIGITS = 10
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,6}$")
_NON_DIGIT = re.compile(r"[^0-9]")


def normalize_phone(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return _NON_DIGIT.sub("", str(value))


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def validate_and_normalize(submission: SubmissionInput, *, clock: Clock = utc_now) -> LeadFields:
    """Gate a form submission and produce its canonical fields.

    Checks run in a fixed order and stop at the first failure, which is raised
    as SubmissionRejectedError. The only impure input is `clock`, consulted
    when the caller did not send a timestamp.
    """
    name = _text(submission.name)
    email = _text(submission.email)
    if not name or not email or _is_blank(submission.phone):
        raise SubmissionRejectedError(RejectionReason.MISSING_REQUIRED_FIELDS)

    phone = normalize_phone(submission.phone)
    if len(phone) != PHONE_DIGITS:
        raise SubmissionRejectedError(RejectionReason.INVALID_PHONE_LENGTH)

    if not is_valid_email(email):
        raise SubmissionRejectedError(RejectionReason.INVALID_EMAIL_FORMAT)

    return LeadFields(
        timestamp=_text(submission.timestamp) or iso_instant(clock()),
        name=name,
        email=email,
        phone=phone,
        city=_text(submission.city) or DEFAULT_CITY,
        details=_text(submission.details) or DEFAULT_DETAILS,
        form_type=_text(submission.form_type) or DEFAULT_FORM_TYPE,
        source=_text(submission.source) or DEFAULT_SOURCE,
    )


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _text(value: object) -> str:
    if _is_blank(value):
        return ""
    return str(value).strip()
