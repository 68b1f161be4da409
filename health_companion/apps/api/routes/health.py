"""Liveness route."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
async def health_check() -> str:
    """Liveness check: always ``OK`` while the process is serving."""
    return "OK"


__all__ = ["router"]
