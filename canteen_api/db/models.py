"""
canteen_api/db/models.py – SQLAlchemy ORM tables for users, canteens, menus, orders.

Each table keeps an integer surrogate `pk` for insertion order and a public
string `id` that the API exposes.
"""
from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    pk            = Column(Integer, primary_key=True, autoincrement=True)
    id            = Column(String,  nullable=False, unique=True, index=True)
    name          = Column(String,  nullable=False, default="")
    email         = Column(String,  nullable=False, unique=True, index=True)
    college_id    = Column(String,  nullable=True,  unique=True, index=True)
    role          = Column(String,  nullable=False)
    canteen_id    = Column(String,  nullable=True)
    password_hash = Column(String,  nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} role={self.role!r}>"


class Canteen(Base):
    __tablename__ = "canteens"

    pk       = Column(Integer, primary_key=True, autoincrement=True)
    id       = Column(String,  nullable=False, unique=True, index=True)
    name     = Column(String,  nullable=False, default="")
    location = Column(String,  nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Canteen id={self.id} name={self.name!r}>"


class MenuItem(Base):
    __tablename__ = "menu_items"

    pk         = Column(Integer, primary_key=True, autoincrement=True)
    id         = Column(String,  nullable=False, unique=True, index=True)
    canteen_id = Column(String,  nullable=False, index=True)
    name       = Column(String,  nullable=False)
    price      = Column(Float,   nullable=False, default=0.0)
    available  = Column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<MenuItem id={self.id} canteen={self.canteen_id} name={self.name!r}>"


class Order(Base):
    __tablename__ = "orders"

    pk            = Column(Integer, primary_key=True, autoincrement=True)
    id            = Column(String,  nullable=False, unique=True, index=True)
    student_id    = Column(String,  nullable=False, index=True)
    canteen_id    = Column(String,  nullable=False, index=True)
    pickup_slot   = Column(String,  nullable=False)
    payment_id    = Column(String,  nullable=False)
    total         = Column(Float,   nullable=False, default=0.0)
    status        = Column(String,  nullable=False)
    numeric_token = Column(String,  nullable=False, index=True)
    qr_code       = Column(Text,    nullable=False, default="")
    created_at    = Column(String,  nullable=False)
    feedback      = Column(Text,    nullable=False, default="")

    lines = relationship(
        "OrderLine",
        order_by="OrderLine.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Order id={self.id} status={self.status!r}>"


class OrderLine(Base):
    __tablename__ = "order_lines"

    pk       = Column(Integer, primary_key=True, autoincrement=True)
    order_pk = Column(Integer, ForeignKey("orders.pk"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    menu_id  = Column(String,  nullable=False)
    name     = Column(String,  nullable=False)
    quantity = Column(Integer, nullable=False)
    price    = Column(Float,   nullable=False)
