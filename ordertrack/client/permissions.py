"""
Client-side column permission cache.

Fetches the persisted permission rows for the signed-in role once and
answers view/edit questions from that snapshot.  Until the rows arrive,
or if fetching fails, editing is denied and viewing is allowed, so a
table can render without ever offering an edit the server would refuse.
"""

from __future__ import annotations

import logging

import httpx

from ordertrack.models.user import Role

logger = logging.getLogger(__name__)

PERMISSIONS_PATH = "/api/permissions"


class ColumnPermissions:
    def __init__(self, client: httpx.AsyncClient, role: Role | str | None) -> None:
        self._client = client
        try:
            self.role = Role(role) if role else None
        except ValueError:
            logger.warning("Unknown role %r; column edits disabled", role)
            self.role = None
        self._rows: dict[str, dict] = {}
        self._fetched = False
        self.loading = True

    async def load(self) -> None:
        """Fetch the role's permission rows.  Only the first call hits the API."""
        if self.role is None or self._fetched:
            return
        self._fetched = True
        try:
            response = await self._client.get(PERMISSIONS_PATH)
            response.raise_for_status()
            self._rows = {row["column"]: row for row in response.json()}
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            # No rows: edits stay denied, columns stay visible
            logger.error("Failed to fetch permissions: %s", exc)
            self._rows = {}
        finally:
            self.loading = False

    def can_edit_column(self, column: str) -> bool:
        if self.role is None or self.loading:
            return False
        row = self._rows.get(column)
        return bool(row and row.get("canEdit"))

    def can_view_column(self, column: str) -> bool:
        if self.role is None or self.loading:
            return True
        row = self._rows.get(column)
        if row is None:
            return True
        return row.get("canView") is not False
