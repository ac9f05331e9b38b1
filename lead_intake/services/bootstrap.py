from __future__ import annotations

from dataclasses import dataclass

from lead_intake.api.handlers.deps import ApiDeps
from lead_intake.clients.google_sheets import GoogleSheetsStore
from lead_intake.clients.stub import InMemorySheetStore
from lead_intake.domain.clock import Clock, utc_now
from lead_intake.domain.contracts import SheetStore
from lead_intake.settings import AppSettings


@dataclass
class RuntimeContainer:
    settings: AppSettings
    store: SheetStore
    api_deps: ApiDeps


def build_store(settings: AppSettings) -> SheetStore:
    if settings.store_backend == "memory":
        return InMemorySheetStore(title=f"{settings.project_name} (in-memory)")
    return GoogleSheetsStore.from_service_account(
        spreadsheet_id=settings.sheet_id,
        client_email=settings.client_email,
        private_key=settings.private_key,
    )


def build_runtime_container(
    settings: AppSettings,
    *,
    store: SheetStore | None = None,
    clock: Clock = utc_now,
) -> RuntimeContainer:
    resolved_store = store if store is not None else build_store(settings)
    api_deps = ApiDeps(store=resolved_store, settings=settings, clock=clock)
    return RuntimeContainer(settings=settings, store=resolved_store, api_deps=api_deps)
