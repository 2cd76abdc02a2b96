"""
core/store.py – CanteenStore class.
Responsibility: the storage abstraction over users, canteens, menu items and
orders. Handlers get a store injected and never touch SQLAlchemy directly.

All I/O goes through a SQLAlchemy Session. Blocking calls are wrapped in
run_in_executor so they don't block the event loop.
"""
import asyncio
import logging
from typing import Any, Callable, Optional

from sqlalchemy import func, or_

from ..db import models as orm
from ..db.seed import seed_demo_data
from ..db.session import db_session, make_engine, make_session_factory
from ..models import Canteen, CanteenWithMenuCount, LineItem, MenuItem, Order, User, UserCreateRequest
from .errors import InvalidRequest
from .lifecycle import OrderStatus

logger = logging.getLogger(__name__)

_MENU_FIELDS = {"canteen_id", "name", "price", "available"}


class CanteenStore:
    """Repository over the four collections. Returns Pydantic models, never ORM rows."""

    def __init__(self, database_url: str = "sqlite://") -> None:
        self._engine  = make_engine(database_url)
        self._factory = make_session_factory(self._engine)

    # ── Public: Lifecycle ──────────────────────────────────────────────────────

    def create_schema(self) -> None:
        orm.Base.metadata.create_all(bind=self._engine)

    def is_empty(self) -> bool:
        with db_session(self._factory) as session:
            return session.query(func.count(orm.Canteen.pk)).scalar() == 0

    def seed(self, hash_password: Callable[[str], str]) -> None:
        with db_session(self._factory) as session:
            seed_demo_data(session, hash_password)
        logger.info("[Store] demo data seeded")

    def dispose(self) -> None:
        self._engine.dispose()

    # ── Public: Users ──────────────────────────────────────────────────────────

    async def find_credentials(self, identifier: str) -> Optional[tuple[User, str]]:
        """Look a user up by email or college id. Returns (user, password_hash)."""
        return await self._run(self._fetch_credentials, identifier)

    async def list_users(self) -> list[User]:
        return await self._run(self._fetch_users)

    async def create_user(self, user_id: str, req: UserCreateRequest, password_hash: str) -> User:
        return await self._run(self._insert_user, user_id, req, password_hash)

    # ── Public: Canteens ───────────────────────────────────────────────────────

    async def list_canteens(self) -> list[Canteen]:
        return await self._run(self._fetch_canteens)

    async def get_canteen(self, canteen_id: str) -> Optional[Canteen]:
        return await self._run(self._fetch_canteen, canteen_id)

    async def count_canteens(self) -> int:
        return await self._run(self._count_canteens)

    async def canteens_with_menu_count(self) -> list[CanteenWithMenuCount]:
        return await self._run(self._fetch_canteen_menu_counts)

    # ── Public: Menu ───────────────────────────────────────────────────────────

    async def list_menu(self, canteen_id: Optional[str] = None) -> list[MenuItem]:
        return await self._run(self._fetch_menu, canteen_id)

    async def get_menu_item(self, item_id: str) -> Optional[MenuItem]:
        return await self._run(self._fetch_menu_item, item_id)

    async def add_menu_item(self, item: MenuItem) -> MenuItem:
        return await self._run(self._insert_menu_item, item)

    async def update_menu_item(self, item_id: str, changes: dict[str, Any]) -> Optional[MenuItem]:
        return await self._run(self._apply_menu_changes, item_id, changes)

    async def delete_menu_item(self, item_id: str) -> bool:
        return await self._run(self._remove_menu_item, item_id)

    # ── Public: Orders ─────────────────────────────────────────────────────────

    async def add_order(self, order: Order) -> Order:
        return await self._run(self._insert_order, order)

    async def get_order(self, order_id: str) -> Optional[Order]:
        return await self._run(self._fetch_order, orm.Order.id == order_id)

    async def find_order_by_token(self, numeric_token: str) -> Optional[Order]:
        return await self._run(self._fetch_order, orm.Order.numeric_token == numeric_token)

    async def list_orders(
        self,
        student_id: Optional[str] = None,
        canteen_id: Optional[str] = None,
    ) -> list[Order]:
        return await self._run(self._fetch_orders, student_id, canteen_id)

    async def set_order_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        return await self._run(self._update_order, order_id, {"status": OrderStatus(status).value})

    async def set_feedback(self, order_id: str, feedback: str) -> Optional[Order]:
        return await self._run(self._update_order, order_id, {"feedback": feedback})

    # ── Private: Users ─────────────────────────────────────────────────────────

    def _fetch_credentials(self, identifier: str) -> Optional[tuple[User, str]]:
        with db_session(self._factory) as session:
            row = (
                session.query(orm.User)
                .filter(or_(orm.User.email == identifier, orm.User.college_id == identifier))
                .order_by(orm.User.pk)
                .first()
            )
            if row is None:
                return None
            return User.model_validate(row), row.password_hash

    def _fetch_users(self) -> list[User]:
        with db_session(self._factory) as session:
            rows = session.query(orm.User).order_by(orm.User.pk).all()
            return [User.model_validate(r) for r in rows]

    def _insert_user(self, user_id: str, req: UserCreateRequest, password_hash: str) -> User:
        with db_session(self._factory) as session:
            taken = [orm.User.email == req.email]
            if req.college_id:
                taken.append(orm.User.college_id == req.college_id)
            if session.query(orm.User.pk).filter(or_(*taken)).first() is not None:
                raise InvalidRequest("Email or college id already registered")
            row = orm.User(
                id=user_id,
                name=req.name,
                email=req.email,
                college_id=req.college_id,
                role=req.role.value,
                canteen_id=req.canteen_id,
                password_hash=password_hash,
            )
            session.add(row)
            session.flush()
            return User.model_validate(row)

    # ── Private: Canteens ──────────────────────────────────────────────────────

    def _fetch_canteens(self) -> list[Canteen]:
        with db_session(self._factory) as session:
            rows = session.query(orm.Canteen).order_by(orm.Canteen.pk).all()
            return [Canteen.model_validate(r) for r in rows]

    def _fetch_canteen(self, canteen_id: str) -> Optional[Canteen]:
        with db_session(self._factory) as session:
            row = session.query(orm.Canteen).filter(orm.Canteen.id == canteen_id).first()
            return Canteen.model_validate(row) if row else None

    def _count_canteens(self) -> int:
        with db_session(self._factory) as session:
            return session.query(func.count(orm.Canteen.pk)).scalar() or 0

    def _fetch_canteen_menu_counts(self) -> list[CanteenWithMenuCount]:
        with db_session(self._factory) as session:
            counts = dict(
                session.query(orm.MenuItem.canteen_id, func.count(orm.MenuItem.pk))
                .group_by(orm.MenuItem.canteen_id)
                .all()
            )
            rows = session.query(orm.Canteen).order_by(orm.Canteen.pk).all()
            return [
                CanteenWithMenuCount(id=r.id, name=r.name, location=r.location, menu_count=counts.get(r.id, 0))
                for r in rows
            ]

    # ── Private: Menu ──────────────────────────────────────────────────────────

    def _fetch_menu(self, canteen_id: Optional[str]) -> list[MenuItem]:
        with db_session(self._factory) as session:
            q = session.query(orm.MenuItem)
            if canteen_id:
                q = q.filter(orm.MenuItem.canteen_id == canteen_id)
            return [MenuItem.model_validate(r) for r in q.order_by(orm.MenuItem.pk).all()]

    def _fetch_menu_item(self, item_id: str) -> Optional[MenuItem]:
        with db_session(self._factory) as session:
            row = session.query(orm.MenuItem).filter(orm.MenuItem.id == item_id).first()
            return MenuItem.model_validate(row) if row else None

    def _insert_menu_item(self, item: MenuItem) -> MenuItem:
        with db_session(self._factory) as session:
            row = orm.MenuItem(**item.model_dump())
            session.add(row)
            session.flush()
            return MenuItem.model_validate(row)

    def _apply_menu_changes(self, item_id: str, changes: dict[str, Any]) -> Optional[MenuItem]:
        with db_session(self._factory) as session:
            row = session.query(orm.MenuItem).filter(orm.MenuItem.id == item_id).first()
            if row is None:
                return None
            for field, value in changes.items():
                if field in _MENU_FIELDS:
                    setattr(row, field, value)
            session.flush()
            return MenuItem.model_validate(row)

    def _remove_menu_item(self, item_id: str) -> bool:
        with db_session(self._factory) as session:
            row = session.query(orm.MenuItem).filter(orm.MenuItem.id == item_id).first()
            if row is None:
                return False
            session.delete(row)
            return True

    # ── Private: Orders ────────────────────────────────────────────────────────

    def _insert_order(self, order: Order) -> Order:
        with db_session(self._factory) as session:
            row = orm.Order(
                id=order.id,
                student_id=order.student_id,
                canteen_id=order.canteen_id,
                pickup_slot=order.pickup_slot,
                payment_id=order.payment_id,
                total=order.total,
                status=OrderStatus(order.status).value,
                numeric_token=order.numeric_token,
                qr_code=order.qr_code,
                created_at=order.created_at,
                feedback=order.feedback,
                lines=[
                    orm.OrderLine(position=i, **line.model_dump())
                    for i, line in enumerate(order.items)
                ],
            )
            session.add(row)
            session.flush()
            return self._orm_to_order(row)

    def _fetch_order(self, condition) -> Optional[Order]:
        with db_session(self._factory) as session:
            row = session.query(orm.Order).filter(condition).order_by(orm.Order.pk).first()
            return self._orm_to_order(row) if row else None

    def _fetch_orders(self, student_id: Optional[str], canteen_id: Optional[str]) -> list[Order]:
        with db_session(self._factory) as session:
            q = session.query(orm.Order)
            if student_id:
                q = q.filter(orm.Order.student_id == student_id)
            if canteen_id:
                q = q.filter(orm.Order.canteen_id == canteen_id)
            return [self._orm_to_order(r) for r in q.order_by(orm.Order.pk).all()]

    def _update_order(self, order_id: str, values: dict[str, Any]) -> Optional[Order]:
        with db_session(self._factory) as session:
            row = session.query(orm.Order).filter(orm.Order.id == order_id).first()
            if row is None:
                return None
            for field, value in values.items():
                setattr(row, field, value)
            session.flush()
            return self._orm_to_order(row)

    # ── Private: Converters ────────────────────────────────────────────────────

    @staticmethod
    def _orm_to_order(row: orm.Order) -> Order:
        return Order(
            id=row.id,
            student_id=row.student_id,
            canteen_id=row.canteen_id,
            items=[
                LineItem(menu_id=l.menu_id, name=l.name, quantity=l.quantity, price=l.price)
                for l in row.lines
            ],
            pickup_slot=row.pickup_slot,
            payment_id=row.payment_id,
            total=row.total,
            status=OrderStatus(row.status),
            numeric_token=row.numeric_token,
            qr_code=row.qr_code or "",
            created_at=row.created_at,
            feedback=row.feedback or "",
        )

    @staticmethod
    async def _run(fn, *args):
        return await asyncio.get_running_loop().run_in_executor(None, fn, *args)
