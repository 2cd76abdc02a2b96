"""routes/system.py – /health"""
from datetime import datetime, timezone
from fastapi import APIRouter
from ..deps import get_notifier

router = APIRouter(tags=["System"])


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "time": datetime.now(timezone.utc).isoformat(),
        "listeners": get_notifier().listener_count,
    }
