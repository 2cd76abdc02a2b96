"""routes/auth.py – POST /auth/login"""
from fastapi import APIRouter, HTTPException
from ..core.errors import CanteenError
from ..deps import get_auth_handler
from ..models import LoginRequest, LoginResponse

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
async def login(req: LoginRequest):
    """Email or college id + password → bearer token and the user profile."""
    try:
        return await get_auth_handler().login(req)
    except CanteenError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
