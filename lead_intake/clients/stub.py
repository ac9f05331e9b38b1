from __future__ import annotations

from dataclasses import dataclass, field
import re

from lead_intake.domain.contracts import SheetValues
from lead_intake.domain.errors import StoreError

_RANGE_PATTERN = re.compile(r"^(?P<sheet>'(?:[^']|'')*'|[^!]+)!(?P<cells>[A-Z]+\d*(?::[A-Z]+\d*)?)$")
_CELL_PATTERN = re.compile(r"^(?P<col>[A-Z]+)(?P<row>\d*)$")


@dataclass
class InMemorySheetStore:
    """Single-tab spreadsheet kept in a list of rows.

    Set `fail_with` to make every call raise it, or `fail_appends_with` to
    only fail appends.
    """

    title: str = "In-memory lead sheet"
    rows: SheetValues = field(default_factory=list)
    fail_with: StoreError | None = None
    fail_appends_with: StoreError | None = None
    appends: list[tuple[str, SheetValues]] = field(default_factory=list)
    writes: list[tuple[str, SheetValues]] = field(default_factory=list)

    def get_title(self) -> str:
        self._maybe_fail()
        return self.title

    def read_range(self, *, range_spec: str) -> SheetValues | None:
        self._maybe_fail()
        first_col, last_col, first_row, last_row = _parse_range(range_spec)
        selected: SheetValues = []
        stop = len(self.rows) if last_row is None else min(last_row, len(self.rows))
        for row in self.rows[first_row - 1 : stop]:
            selected.append(list(row[first_col:last_col + 1]))
        while selected and not any(selected[-1]):
            selected.pop()
        return selected or None

    def write_range(self, *, range_spec: str, rows: SheetValues) -> None:
        self._maybe_fail()
        first_col, _, first_row, _ = _parse_range(range_spec)
        for offset, values in enumerate(rows):
            index = first_row - 1 + offset
            while len(self.rows) <= index:
                self.rows.append([])
            target = self.rows[index]
            while len(target) < first_col + len(values):
                target.append("")
            target[first_col:first_col + len(values)] = [str(value) for value in values]
        self.writes.append((range_spec, [list(row) for row in rows]))

    def append_rows(self, *, range_spec: str, rows: SheetValues) -> None:
        self._maybe_fail()
        if self.fail_appends_with is not None:
            raise self.fail_appends_with
        _parse_range(range_spec)
        for values in rows:
            self.rows.append([str(value) for value in values])
        self.appends.append((range_spec, [list(row) for row in rows]))

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with


def _parse_range(range_spec: str) -> tuple[int, int, int, int | None]:
    match = _RANGE_PATTERN.match(range_spec)
    if match is None:
        raise StoreError(f"Unable to parse range: {range_spec}", code=400)
    start, _, end = match.group("cells").partition(":")
    first_col, first_row = _parse_cell(start)
    last_col, last_row = _parse_cell(end or start)
    return first_col, last_col, first_row or 1, last_row


def _parse_cell(cell: str) -> tuple[int, int | None]:
    match = _CELL_PATTERN.match(cell)
    if match is None:
        raise StoreError(f"Unable to parse range: {cell}", code=400)
    column = 0
    for char in match.group("col"):
        column = column * 26 + (ord(char) - ord("A") + 1)
    row = match.group("row")
    return column - 1, int(row) if row else None
