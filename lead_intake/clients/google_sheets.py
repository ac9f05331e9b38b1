from __future__ import annotations

from collections.abc import Callable
from functools import cached_property
from typing import TypeVar

from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
import gspread
from gspread.exceptions import APIError, GSpreadException
import requests

from lead_intake.domain.contracts import INSERT_DATA_OPTION, VALUE_INPUT_OPTION, SheetValues
from lead_intake.domain.errors import StoreError

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

T = TypeVar("T")


def build_credentials(*, client_email: str, private_key: str) -> Credentials:
    info = {
        "type": "service_account",
        "client_email": client_email,
        "private_key": private_key,
        "token_uri": TOKEN_URI,
    }
    return Credentials.from_service_account_info(info, scopes=SCOPES)


class GoogleSheetsStore:
    """SheetStore backed by the Sheets v4 values API through gspread."""

    def __init__(self, *, spreadsheet_id: str, client: gspread.Client) -> None:
        self.spreadsheet_id = spreadsheet_id
        self._client = client

    @classmethod
    def from_service_account(
        cls,
        *,
        spreadsheet_id: str,
        client_email: str,
        private_key: str,
    ) -> GoogleSheetsStore:
        try:
            credentials = build_credentials(client_email=client_email, private_key=private_key)
        except ValueError as exc:
            raise StoreError(f"invalid service account credentials: {exc}") from exc
        return cls(spreadsheet_id=spreadsheet_id, client=gspread.authorize(credentials))

    @cached_property
    def _spreadsheet(self) -> gspread.Spreadsheet:
        return self._client.open_by_key(self.spreadsheet_id)

    def get_title(self) -> str:
        metadata = self._call(lambda: self._spreadsheet.fetch_sheet_metadata())
        return str(metadata["properties"]["title"])

    def read_range(self, *, range_spec: str) -> SheetValues | None:
        response = self._call(lambda: self._spreadsheet.values_get(range_spec))
        return response.get("values")

    def write_range(self, *, range_spec: str, rows: SheetValues) -> None:
        self._call(
            lambda: self._spreadsheet.values_update(
                range_spec,
                params={"valueInputOption": VALUE_INPUT_OPTION},
                body={"values": rows},
            )
        )

    def append_rows(self, *, range_spec: str, rows: SheetValues) -> None:
        self._call(
            lambda: self._spreadsheet.values_append(
                range_spec,
                params={
                    "valueInputOption": VALUE_INPUT_OPTION,
                    "insertDataOption": INSERT_DATA_OPTION,
                },
                body={"values": rows},
            )
        )

    def _call(self, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except APIError as exc:
            raise _api_error_to_store_error(exc) from exc
        except (GSpreadException, GoogleAuthError, requests.RequestException) as exc:
            raise StoreError(str(exc) or exc.__class__.__name__) from exc


def _api_error_to_store_error(exc: APIError) -> StoreError:
    error = getattr(exc, "error", None)
    message = str(exc)
    code: int | str | None = getattr(exc, "code", None)
    if isinstance(error, dict):
        message = str(error.get("message") or message)
        code = error.get("code", code)
    return StoreError(message, code=code)
