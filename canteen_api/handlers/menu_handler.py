"""
handlers/menu_handler.py – MenuHandler class.
Responsibility: canteen/menu listing and staff-scoped menu management.
"""
import logging
import uuid
from typing import Optional

from ..core.access import Principal, ensure_canteen_access
from ..core.errors import NotFound
from ..core.store import CanteenStore
from ..models import Canteen, MenuCreateRequest, MenuItem, MenuUpdateRequest

logger = logging.getLogger(__name__)


class MenuHandler:
    """Handles /canteens, /menus and /staff/menu."""

    def __init__(self, store: CanteenStore) -> None:
        self._store = store

    async def list_canteens(self) -> list[Canteen]:
        return await self._store.list_canteens()

    async def list_menu(self, canteen_id: Optional[str] = None) -> list[MenuItem]:
        return await self._store.list_menu(canteen_id)

    async def create(self, principal: Principal, req: MenuCreateRequest) -> MenuItem:
        ensure_canteen_access(principal, req.canteen_id, "Cannot create menu in another canteen")
        await self._require_canteen(req.canteen_id)

        item = MenuItem(id=str(uuid.uuid4()), **req.model_dump())
        saved = await self._store.add_menu_item(item)
        logger.info("[Menu] %s added %s (%s) to %s", principal.user_id, saved.id, saved.name, saved.canteen_id)
        return saved

    async def update(self, principal: Principal, item_id: str, req: MenuUpdateRequest) -> MenuItem:
        item = await self._require_item(item_id)
        ensure_canteen_access(principal, item.canteen_id, "Cannot edit this menu")

        changes = req.model_dump(exclude_unset=True, exclude_none=True)
        target  = changes.get("canteen_id")
        if target and target != item.canteen_id:
            ensure_canteen_access(principal, target, "Cannot move menu to another canteen")
            await self._require_canteen(target)

        updated = await self._store.update_menu_item(item_id, changes)
        if updated is None:
            raise NotFound("Menu item not found")
        logger.info("[Menu] %s edited %s: %s", principal.user_id, item_id, sorted(changes))
        return updated

    async def delete(self, principal: Principal, item_id: str) -> None:
        item = await self._require_item(item_id)
        ensure_canteen_access(principal, item.canteen_id, "Cannot delete this menu")
        if not await self._store.delete_menu_item(item_id):
            raise NotFound("Menu item not found")
        logger.info("[Menu] %s deleted %s", principal.user_id, item_id)

    # ── Private helpers ────────────────────────────────────────────────────────

    async def _require_item(self, item_id: str) -> MenuItem:
        item = await self._store.get_menu_item(item_id)
        if item is None:
            raise NotFound("Menu item not found")
        return item

    async def _require_canteen(self, canteen_id: str) -> Canteen:
        canteen = await self._store.get_canteen(canteen_id)
        if canteen is None:
            raise NotFound("Canteen not found")
        return canteen
