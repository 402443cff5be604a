"""
Health check endpoint for the notification service.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Return ``{"status": "ok"}`` when the service is alive."""
    return {"status": "ok"}
