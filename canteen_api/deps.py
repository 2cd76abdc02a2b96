"""
deps.py – Dependency Injection: singleton service instances + auth dependencies.
Created once when the server starts.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .core.access import Principal, Role, require_role
from .core.errors import Forbidden, Unauthorized
from .core.notifier import OrderNotifier
from .core.payments import PaymentVerifier
from .core.security import decode_token
from .core.store import CanteenStore
from .handlers.admin_handler import AdminHandler
from .handlers.auth_handler import AuthHandler
from .handlers.menu_handler import MenuHandler
from .handlers.order_handler import OrderHandler
from .handlers.report_handler import ReportHandler

# ── Core singletons ────────────────────────────────────────────────────────────

_store    = CanteenStore(settings.database_url)
_notifier = OrderNotifier(settings.notify_send_timeout)
_payments = PaymentVerifier()

# ── Handler singletons ─────────────────────────────────────────────────────────

_auth    = AuthHandler(_store)
_orders  = OrderHandler(_store, _payments, _notifier)
_menus   = MenuHandler(_store)
_reports = ReportHandler(_store)
_admin   = AdminHandler(_store)


# ── Getters (used in routes) ───────────────────────────────────────────────────

def get_store()          -> CanteenStore:   return _store
def get_notifier()       -> OrderNotifier:  return _notifier
def get_auth_handler()   -> AuthHandler:    return _auth
def get_order_handler()  -> OrderHandler:   return _orders
def get_menu_handler()   -> MenuHandler:    return _menus
def get_report_handler() -> ReportHandler:  return _reports
def get_admin_handler()  -> AdminHandler:   return _admin


# ── Auth dependencies ──────────────────────────────────────────────────────────

_bearer = HTTPBearer(auto_error=False)


async def get_principal(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer),
) -> Principal:
    """Decode the bearer credential, 401 when missing, invalid or expired."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_token(credentials.credentials)
    except Unauthorized as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_roles(*roles: Role):
    """Dependency factory: authenticated principal whose role is in `roles`, else 403."""
    allowed = frozenset(roles)

    async def _principal_with_role(principal: Principal = Depends(get_principal)) -> Principal:
        try:
            require_role(principal, allowed)
        except Forbidden as e:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
        return principal

    return _principal_with_role
