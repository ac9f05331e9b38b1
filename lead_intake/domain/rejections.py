from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum


class RejectionReason(StrEnum):
    MISSING_REQUIRED_FIELDS = "missing_required_fields"
    INVALID_PHONE_LENGTH = "invalid_phone_length"
    INVALID_EMAIL_FORMAT = "invalid_email_format"


# Messages are part of the HTTP contract and are returned verbatim.
REJECTION_MESSAGES: Mapping[RejectionReason, str] = {
    RejectionReason.MISSING_REQUIRED_FIELDS: "Please fill all required fields: Name, Email, Phone",
    RejectionReason.INVALID_PHONE_LENGTH: "Phone number must be exactly 10 digits",
    RejectionReason.INVALID_EMAIL_FORMAT: "Please enter a valid email address",
}


def rejection_message(reason: RejectionReason) -> str:
    return REJECTION_MESSAGES[reason]
