from __future__ import annotations

from lead_intake.api.schemas import ErrorResponse


class ApiError(Exception):
    """Raised by handlers to return an ErrorResponse body with a status code."""

    def __init__(self, *, status_code: int, body: ErrorResponse) -> None:
        super().__init__(body.error)
        self.status_code = status_code
        self.body = body
