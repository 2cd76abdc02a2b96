"""
handlers/admin_handler.py – AdminHandler class.
Responsibility: user accounts and canteen listing for admins.
"""
import asyncio
import logging
import uuid

from ..core.security import hash_password
from ..core.store import CanteenStore
from ..models import CanteenWithMenuCount, User, UserCreateRequest

logger = logging.getLogger(__name__)


class AdminHandler:
    """Handles /admin/users and /admin/canteens."""

    def __init__(self, store: CanteenStore) -> None:
        self._store = store

    async def list_users(self) -> list[User]:
        return await self._store.list_users()

    async def create_user(self, req: UserCreateRequest) -> User:
        # staff without canteen_id is accepted as-is
        password_hash = await asyncio.get_running_loop().run_in_executor(
            None, hash_password, req.password
        )
        user = await self._store.create_user(str(uuid.uuid4()), req, password_hash)
        logger.info("[Admin] created %s user %s", user.role.value, user.id)
        return user

    async def list_canteens(self) -> list[CanteenWithMenuCount]:
        return await self._store.canteens_with_menu_count()
