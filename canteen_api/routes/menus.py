"""routes/menus.py – GET /canteens, GET /menus, POST|PATCH|DELETE /staff/menu"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..core.access import ANY_ROLE, STAFF_OR_ADMIN, Principal
from ..core.errors import CanteenError
from ..deps import get_menu_handler, require_roles
from ..models import Canteen, MenuCreateRequest, MenuItem, MenuUpdateRequest

router = APIRouter(tags=["Menu"])


@router.get("/canteens", response_model=list[Canteen])
async def list_canteens(principal: Principal = Depends(require_roles(*ANY_ROLE))):
    return await get_menu_handler().list_canteens()


@router.get("/menus", response_model=list[MenuItem])
async def list_menus(
    canteen_id: Optional[str] = Query(default=None, description="Only items of this canteen"),
    principal: Principal = Depends(require_roles(*ANY_ROLE)),
):
    return await get_menu_handler().list_menu(canteen_id)


@router.post("/staff/menu", response_model=MenuItem, status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    req: MenuCreateRequest,
    principal: Principal = Depends(require_roles(*STAFF_OR_ADMIN)),
):
    try:
        return await get_menu_handler().create(principal, req)
    except CanteenError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/staff/menu/{item_id}", response_model=MenuItem)
async def update_menu_item(
    item_id: str,
    req: MenuUpdateRequest,
    principal: Principal = Depends(require_roles(*STAFF_OR_ADMIN)),
):
    try:
        return await get_menu_handler().update(principal, item_id, req)
    except CanteenError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/staff/menu/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu_item(
    item_id: str,
    principal: Principal = Depends(require_roles(*STAFF_OR_ADMIN)),
):
    try:
        await get_menu_handler().delete(principal, item_id)
    except CanteenError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
