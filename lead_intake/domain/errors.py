from __future__ import annotations

from lead_intake.domain.rejections import RejectionReason, rejection_message


class DomainError(Exception):
    pass


class ConfigurationError(DomainError):
    pass


class SubmissionRejectedError(DomainError):
    def __init__(self, reason: RejectionReason) -> None:
        super().__init__(rejection_message(reason))
        self.reason = reason


class StoreError(DomainError):
    """Opaque collaborator failure: auth, quota, transport or a malformed range."""

    def __init__(self, message: str, code: int | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class StoreUnavailableError(StoreError):
    pass
