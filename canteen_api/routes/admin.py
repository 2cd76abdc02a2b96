"""routes/admin.py – /admin/overview, /admin/users, /admin/canteens"""
from fastapi import APIRouter, Depends, HTTPException, status

from ..core.access import ADMIN_ONLY, Principal
from ..core.errors import CanteenError
from ..deps import get_admin_handler, get_report_handler, require_roles
from ..models import CanteenWithMenuCount, Overview, User, UserCreateRequest

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/overview", response_model=Overview)
async def overview(principal: Principal = Depends(require_roles(*ADMIN_ONLY))):
    """
    Platform totals plus:
    - `peak_time` – hour of day with the most orders (first one wins a tie)
    - `popular_items` – top 5 items by quantity ordered
    """
    return await get_report_handler().overview()


@router.get("/users", response_model=list[User])
async def list_users(principal: Principal = Depends(require_roles(*ADMIN_ONLY))):
    return await get_admin_handler().list_users()


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    req: UserCreateRequest,
    principal: Principal = Depends(require_roles(*ADMIN_ONLY)),
):
    try:
        return await get_admin_handler().create_user(req)
    except CanteenError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/canteens", response_model=list[CanteenWithMenuCount])
async def list_canteens(principal: Principal = Depends(require_roles(*ADMIN_ONLY))):
    return await get_admin_handler().list_canteens()
