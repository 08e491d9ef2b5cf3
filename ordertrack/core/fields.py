"""
Order column registry — which columns exist, what kind of value each
holds, and how incoming edit values are coerced.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

# Free-text work instructions shown in a popup per production step
POPUP_FIELDS: tuple[str, ...] = (
    "popup_text_bruto_zagen",
    "popup_text_pers",
    "popup_text_netto_zagen",
    "popup_text_verkantlijmen",
    "popup_text_cnc",
    "popup_text_pmt",
    "popup_text_lakkerij",
    "popup_text_inpak",
    "popup_text_rail",
    "popup_text_assemblage",
)

# Production stages recorded by the scan station
STAGE_FIELDS: tuple[str, ...] = (
    "bruto_zagen",
    "pers",
    "netto_zagen",
    "verkantlijmen",
    "cnc_start_datum",
    "pmt_start_datum",
)

SALES_FIELDS: tuple[str, ...] = (
    "project",
    "lever_datum",
    "opmerking",
    "inkoopordernummer",
)

LOCK_FIELD = "slotje"

DATE_FIELDS = frozenset({
    "productie_datum", "lever_datum", "startdatum_assemblage",
    "start_datum_machinale", *STAGE_FIELDS, "lakkerij_datum",
    "coaten_m1", "verkantlijmen_order_gereed",
})

NUMBER_FIELDS = frozenset({
    "pos", "height", "db_waarde", "mon", "pho", "pro",
    "ap", "sp", "cp", "wp", "dwp", "pc", "pcp", "totaal_boards", "tot",
})

BOOLEAN_FIELDS = frozenset({
    "inpak_rail", "boards", "frames", "ap_tws", "wp_frame",
    "wp_dwp_pc", "boards_component", "profielen", "kokers", "lakken",
    "controle_order", "gez_planning", LOCK_FIELD,
})

# Columns that may be changed through PATCH /orders/{id}
EDITABLE_FIELDS: tuple[str, ...] = (
    "project", "pos", "type_artikel", "debiteur_klant",
    "material", "kantenband", "kleur", "height", "db_waarde",
    "opmerking", "productie_datum", "lever_datum", "startdatum_assemblage",
    "start_datum_machinale", "bruto_zagen", "pers", "netto_zagen",
    "verkantlijmen", "cnc_start_datum", "pmt_start_datum", "lakkerij_datum",
    "coaten_m1", "verkantlijmen_order_gereed", "inpak_rail", "boards",
    "frames", "ap_tws", "wp_frame", "wp_dwp_pc", "boards_component",
    "profielen", "kokers", "lakken", "mon", "pho", "pro", "ap", "sp",
    "cp", "wp", "dwp", "pc", "pcp", "totaal_boards", "tot",
    "controle_order", "inkoopordernummer", "gez_planning", LOCK_FIELD,
)

# Fields returned by the scan lookup, nothing more
SCAN_FIELDS: tuple[str, ...] = (
    "id",
    "verkoop_order",
    "project",
    "debiteur_klant",
    "type_artikel",
    "material",
    *STAGE_FIELDS,
)


def is_popup_field(column: str) -> bool:
    return column in POPUP_FIELDS


def _parse_datetime(field: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"Invalid date format for field {field}") from None
    else:
        raise ValueError(f"Invalid date format for field {field}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def coerce_field_value(field: str, value: Any) -> Any:
    """Convert an incoming edit value to the column's Python type.

    ``None`` always clears the column.  Raises ``ValueError`` with a
    client-facing message when the value does not fit the column.
    """
    if value is None:
        return None

    if field in DATE_FIELDS:
        return _parse_datetime(field, value)

    if field in NUMBER_FIELDS:
        if isinstance(value, bool):
            raise ValueError(f"Invalid number format for field {field}")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid number format for field {field}") from None
        # NaN and infinities cannot be rendered as JSON
        if not math.isfinite(number):
            raise ValueError(f"Invalid number format for field {field}")
        return number

    if field in BOOLEAN_FIELDS:
        return bool(value)

    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"Invalid value for field {field}")
    return str(value)
