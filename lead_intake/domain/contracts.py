from __future__ import annotations

from typing import Protocol, runtime_checkable

VALUE_INPUT_OPTION = "USER_ENTERED"
INSERT_DATA_OPTION = "INSERT_ROWS"

SheetValues = list[list[str]]


@runtime_checkable
class SheetStore(Protocol):
    """Spreadsheet collaborator contract.

    Every method is a blocking call. Implementations wrap all failures in
    StoreError; callers never see transport or client library exceptions.
    """

    def get_title(self) -> str: ...

    def read_range(self, *, range_spec: str) -> SheetValues | None: ...

    def write_range(self, *, range_spec: str, rows: SheetValues) -> None: ...

    def append_rows(self, *, range_spec: str, rows: SheetValues) -> None: ...
