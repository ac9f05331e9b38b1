from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SheetRows = list[list[str]]


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    code: int | str | None = None


class SubmitFormRequest(BaseModel):
    """Lead form payload.

    Every field is optional here: presence and format are checked by the
    validation pipeline so that rejections carry its fixed messages.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    email: str | None = None
    phone: str | int | None = None
    city: str | None = None
    details: str | None = None
    form_type: str | None = Field(default=None, alias="formType")
    timestamp: str | None = None
    source: str | None = None


class LeadEcho(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    phone: str = Field(pattern=r"^[0-9]{10}$")
    form_type: str = Field(alias="formType")


class SubmitFormResponse(BaseModel):
    success: bool = True
    message: str
    data: LeadEcho


class ConnectionTestResponse(BaseModel):
    success: bool = True
    message: str
    data: SheetRows


class SubmissionsResponse(BaseModel):
    success: bool = True
    data: SheetRows


class HealthResponse(BaseModel):
    status: str
    project: str
    message: str
    timestamp: str


class EndpointIndex(BaseModel):
    health: str = "/health"
    test: str = "/api/test"
    submit: str = "/api/submit-form (POST)"
    submissions: str = "/api/submissions"


class IndexResponse(BaseModel):
    project: str
    version: str
    endpoints: EndpointIndex
