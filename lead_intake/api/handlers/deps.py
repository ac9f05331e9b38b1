from __future__ import annotations

from dataclasses import dataclass

from lead_intake.domain.clock import Clock, utc_now
from lead_intake.domain.contracts import SheetStore
from lead_intake.settings import AppSettings


@dataclass(frozen=True)
class ApiDeps:
    store: SheetStore
    settings: AppSettings
    clock: Clock = utc_now
