"""Pydantic schemas for orders, scan lookups and order edits."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


# ── Scan ────────────────────────────────────────────────────────────
class ScanOrderRead(BaseModel):
    """What the scan station sees."""

    id: str
    verkoop_order: str
    project: str | None
    debiteur_klant: str | None
    type_artikel: str | None
    material: str | None
    bruto_zagen: datetime | None
    pers: datetime | None
    netto_zagen: datetime | None
    verkantlijmen: datetime | None
    cnc_start_datum: datetime | None
    pmt_start_datum: datetime | None

    model_config = {"from_attributes": True}


# ── Full order ──────────────────────────────────────────────────────
class OrderRead(ScanOrderRead):
    pos: float | None = None
    kantenband: str | None = None
    kleur: str | None = None
    height: float | None = None
    db_waarde: float | None = None
    opmerking: str | None = None
    inkoopordernummer: str | None = None

    productie_datum: datetime | None = None
    lever_datum: datetime | None = None
    startdatum_assemblage: datetime | None = None
    start_datum_machinale: datetime | None = None
    lakkerij_datum: datetime | None = None
    coaten_m1: datetime | None = None
    verkantlijmen_order_gereed: datetime | None = None

    inpak_rail: bool | None = None
    boards: bool | None = None
    frames: bool | None = None
    ap_tws: bool | None = None
    wp_frame: bool | None = None
    wp_dwp_pc: bool | None = None
    boards_component: bool | None = None
    profielen: bool | None = None
    kokers: bool | None = None
    lakken: bool | None = None
    controle_order: bool | None = None
    gez_planning: bool | None = None

    mon: float | None = None
    pho: float | None = None
    pro: float | None = None
    ap: float | None = None
    sp: float | None = None
    cp: float | None = None
    wp: float | None = None
    dwp: float | None = None
    pc: float | None = None
    pcp: float | None = None
    totaal_boards: float | None = None
    tot: float | None = None

    slotje: bool = False

    popup_text_bruto_zagen: str | None = None
    popup_text_pers: str | None = None
    popup_text_netto_zagen: str | None = None
    popup_text_verkantlijmen: str | None = None
    popup_text_cnc: str | None = None
    popup_text_pmt: str | None = None
    popup_text_lakkerij: str | None = None
    popup_text_inpak: str | None = None
    popup_text_rail: str | None = None
    popup_text_assemblage: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None


# ── Edits ───────────────────────────────────────────────────────────
class OrderFieldUpdate(BaseModel):
    """Exactly one ``{field: value}`` pair, checked by the endpoint."""

    model_config = {"extra": "allow"}

    def single_item(self) -> tuple[str, Any] | None:
        items = list((self.model_extra or {}).items())
        return items[0] if len(items) == 1 else None


class PopupInstructionUpdate(BaseModel):
    field: str
    value: str | None = None


class MachineActionRequest(BaseModel):
    action: str = ""
    field: str = ""


class LockSummary(BaseModel):
    id: str
    verkoop_order: str
    slotje: bool

    model_config = {"from_attributes": True}


class ToggleLockResponse(BaseModel):
    success: bool = True
    order: LockSummary
    message: str
