"""Per-user dashboard settings stored as JSON on the user record."""

from __future__ import annotations

import copy
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: dict[str, dict[str, Any]] = {
    "user": {
        "theme": "light",
        "language": "en",
        "tableCompactMode": False,
        "defaultPageSize": 50,
        "showNotifications": True,
        "defaultSortColumn": "lever_datum",
        "defaultSortDirection": "asc",
        "defaultColumns": ["verkoop_order", "project", "debiteur_klant", "material", "lever_datum"],
        "dateFormat": "MM/DD/YYYY",
        "timeFormat": "24h",
    },
    "admin": {
        "defaultRole": "GUEST",
        "requireApprovalForChanges": False,
        "trackOrderHistory": True,
        "autoCloseNotifications": True,
        "notificationRetentionDays": 30,
        "allowCustomPages": True,
        "maxPriorityOrders": 20,
        "auditLogEnabled": True,
        "autoBackup": True,
    },
}


def default_settings() -> dict[str, dict[str, Any]]:
    return copy.deepcopy(DEFAULT_SETTINGS)


def merged_settings(stored: str | None) -> dict[str, dict[str, Any]]:
    """Stored settings laid over the defaults.

    Missing keys take their default.  Unparseable or malformed JSON yields
    the defaults unchanged.
    """
    merged = default_settings()
    if not stored:
        return merged

    try:
        data = json.loads(stored)
        for section in ("user", "admin"):
            merged[section].update(data.get(section) or {})
    except (ValueError, TypeError, AttributeError) as exc:
        logger.error("Error parsing stored settings, using defaults: %s", exc)
        return default_settings()
    return merged
