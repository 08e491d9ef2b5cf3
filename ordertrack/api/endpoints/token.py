"""
Bearer token endpoint — exchanges a browser session for a signed token
that non-cookie clients (scan stations, socket bridges) can present.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from ordertrack.api.deps import get_current_identity
from ordertrack.core.security import issue_bearer_token
from ordertrack.schemas.token import Identity, TokenResponse

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.get("/get-token", response_model=TokenResponse)
async def get_token(
    identity: Identity = Depends(get_current_identity),
) -> TokenResponse:
    token = issue_bearer_token(identity)
    logger.info("Issued bearer token for %s", identity.email)
    return TokenResponse(token=token)
