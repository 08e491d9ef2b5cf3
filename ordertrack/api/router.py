"""
API router aggregator — wires the endpoint modules together.
"""

from fastapi import APIRouter

from ordertrack.api.endpoints import (auth, custom_pages, notifications,
                                      orders, permissions, priority, settings,
                                      system, token)

api_router = APIRouter()

# Login, logout, guest mode, session inspection
api_router.include_router(auth.router)

# Session -> bearer token exchange
api_router.include_router(token.router)

# Column permissions for the caller's role
api_router.include_router(permissions.router)

# Order list, scan lookup, edits
api_router.include_router(orders.router)

api_router.include_router(notifications.router)

# Shared priority list, saved dashboard views and per-user preferences
api_router.include_router(priority.router)
api_router.include_router(custom_pages.router)
api_router.include_router(settings.router)

api_router.include_router(system.router)
