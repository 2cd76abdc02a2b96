"""
handlers/auth_handler.py – AuthHandler class.
Responsibility: password login → signed, time-limited bearer credential.
"""
import asyncio
import logging

from ..core.errors import Unauthorized
from ..core.security import create_access_token, verify_password
from ..core.store import CanteenStore
from ..models import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)


class AuthHandler:
    """Handles /auth/login."""

    def __init__(self, store: CanteenStore) -> None:
        self._store = store

    async def login(self, req: LoginRequest) -> LoginResponse:
        found = await self._store.find_credentials(req.identifier)
        if found is None:
            logger.info("[Auth] unknown identifier %r", req.identifier)
            raise Unauthorized("Invalid credentials")

        user, password_hash = found
        ok = await asyncio.get_running_loop().run_in_executor(
            None, verify_password, req.password, password_hash
        )
        if not ok:
            logger.info("[Auth] bad password for %s", user.id)
            raise Unauthorized("Invalid credentials")

        token = create_access_token(user.id, user.role, user.canteen_id)
        logger.info("[Auth] %s logged in as %s", user.id, user.role.value)
        return LoginResponse(token=token, user=user)
