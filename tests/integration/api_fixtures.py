from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime

from fastapi import FastAPI

from lead_intake.api.http_app import build_app
from lead_intake.clients.stub import InMemorySheetStore
from lead_intake.services.bootstrap import build_runtime_container
from lead_intake.settings import AppSettings

FIXED_NOW = datetime(2026, 10, 17, 6, 15, tzinfo=UTC)

TEST_SETTINGS = AppSettings(
    sheet_id="sheet-test",
    client_email="svc@project.iam.gserviceaccount.com",
    sheet_name="Leads",
    store_backend="memory",
)


def fixed_clock() -> datetime:
    return FIXED_NOW


def build_test_app(
    *,
    store: InMemorySheetStore | None = None,
    **overrides: object,
) -> tuple[FastAPI, InMemorySheetStore]:
    sheet_store = store if store is not None else InMemorySheetStore()
    settings = replace(TEST_SETTINGS, **overrides)
    container = build_runtime_container(settings, store=sheet_store, clock=fixed_clock)
    return build_app(api_deps=container.api_deps, run_id="integration-api"), sheet_store
