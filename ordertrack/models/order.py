"""
Order model — one production order and its stage progress.

The column set is closed: every column the dashboard shows is declared
here.  Stage timestamps are independent and nullable; the system does
not enforce the order in which they are filled in.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, String, Text
from sqlalchemy.orm import relationship

from ordertrack.db.base import Base
from ordertrack.models.user import new_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _date() -> Column:
    return Column(DateTime(timezone=True), nullable=True)


def _flag() -> Column:
    return Column(Boolean, nullable=True)


def _number() -> Column:
    return Column(Float, nullable=True)


class Order(Base):
    __tablename__ = "orders"

    id: str = Column(String(36), primary_key=True, default=new_id)  # type: ignore[assignment]
    verkoop_order: str = Column(String(64), unique=True, nullable=False, index=True)  # type: ignore[assignment]

    # ── Identification ───────────────────────────────────────────────
    project = Column(String(200), nullable=True)
    pos = _number()
    type_artikel = Column(String(200), nullable=True)
    debiteur_klant = Column(String(200), nullable=True)
    material = Column(String(200), nullable=True)
    kantenband = Column(String(200), nullable=True)
    kleur = Column(String(100), nullable=True)
    height = _number()
    db_waarde = _number()
    opmerking = Column(Text, nullable=True)
    inkoopordernummer = Column(String(100), nullable=True)

    # ── Planning dates ───────────────────────────────────────────────
    productie_datum = _date()
    lever_datum = _date()
    startdatum_assemblage = _date()
    start_datum_machinale = _date()

    # ── Production stages ────────────────────────────────────────────
    bruto_zagen = _date()
    pers = _date()
    netto_zagen = _date()
    verkantlijmen = _date()
    cnc_start_datum = _date()
    pmt_start_datum = _date()
    lakkerij_datum = _date()
    coaten_m1 = _date()
    verkantlijmen_order_gereed = _date()

    # ── Component flags ──────────────────────────────────────────────
    inpak_rail = _flag()
    boards = _flag()
    frames = _flag()
    ap_tws = _flag()
    wp_frame = _flag()
    wp_dwp_pc = _flag()
    boards_component = _flag()
    profielen = _flag()
    kokers = _flag()
    lakken = _flag()
    controle_order = _flag()
    gez_planning = _flag()

    # ── Quantities ───────────────────────────────────────────────────
    mon = _number()
    pho = _number()
    pro = _number()
    ap = _number()
    sp = _number()
    cp = _number()
    wp = _number()
    dwp = _number()
    pc = _number()
    pcp = _number()
    totaal_boards = _number()
    tot = _number()

    # Record lock
    slotje: bool = Column(Boolean, nullable=False, default=False)  # type: ignore[assignment]

    # ── Work instructions ────────────────────────────────────────────
    popup_text_bruto_zagen = Column(Text, nullable=True)
    popup_text_pers = Column(Text, nullable=True)
    popup_text_netto_zagen = Column(Text, nullable=True)
    popup_text_verkantlijmen = Column(Text, nullable=True)
    popup_text_cnc = Column(Text, nullable=True)
    popup_text_pmt = Column(Text, nullable=True)
    popup_text_lakkerij = Column(Text, nullable=True)
    popup_text_inpak = Column(Text, nullable=True)
    popup_text_rail = Column(Text, nullable=True)
    popup_text_assemblage = Column(Text, nullable=True)

    created_at: datetime = Column(DateTime(timezone=True), default=_utcnow)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )

    notifications = relationship(
        "Notification",
        back_populates="order",
        cascade="all, delete-orphan",
    )
