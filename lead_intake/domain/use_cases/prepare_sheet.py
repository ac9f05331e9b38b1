from __future__ import annotations

import logging

from lead_intake.domain.contracts import SheetStore
from lead_intake.domain.errors import StoreError, StoreUnavailableError
from lead_intake.domain.models import HEADER_ROW, header_range

logger = logging.getLogger("lead_intake.sheets")


def probe_store(store: SheetStore) -> str:
    try:
        title = store.get_title()
    except StoreError as exc:
        logger.error("sheet connection failed", extra={"code": exc.code, "details": exc.message})
        raise StoreUnavailableError(exc.message, code=exc.code) from exc
    logger.info("sheet connected", extra={"sheet_title": title})
    return title


def ensure_header_row(store: SheetStore, *, sheet_name: str) -> bool:
    """Seed the header row when the sheet is empty.

    Returns True when the header was written. Store failures are logged and
    reported as False, never raised.
    """
    range_spec = header_range(sheet_name)
    try:
        existing = store.read_range(range_spec=range_spec)
        if existing:
            logger.info("sheet header already present")
            return False
        store.write_range(range_spec=range_spec, rows=[list(HEADER_ROW)])
    except StoreError as exc:
        logger.error("sheet header preparation failed", extra={"code": exc.code, "details": exc.message})
        return False
    logger.info("sheet header created")
    return True


def prepare_store(store: SheetStore, *, sheet_name: str) -> str:
    title = probe_store(store)
    ensure_header_row(store, sheet_name=sheet_name)
    return title
