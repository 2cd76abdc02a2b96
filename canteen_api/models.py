"""
models.py – Pydantic schemas for request/response.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .core.access import Role
from .core.lifecycle import OrderStatus


# ── Request Models ─────────────────────────────────────────────────────────────

class LoginRequest(BaseModel):
    identifier: str = Field(..., min_length=1, description="Email or college id")
    password: str   = Field(..., min_length=1)


class PaymentVerifyRequest(BaseModel):
    payment_method: str = Field(..., description="UPI | CARD | WALLET")


class OrderItemRequest(BaseModel):
    menu_id: str
    quantity: int = Field(default=1, ge=1)


class CreateOrderRequest(BaseModel):
    # presence is checked by OrderHandler so every missing field gets the same 400
    canteen_id:  Optional[str] = None
    items:       Optional[List[OrderItemRequest]] = None
    pickup_slot: Optional[str] = Field(default=None, description="ISO datetime of pickup")
    payment_id:  Optional[str] = None


class StatusUpdateRequest(BaseModel):
    status: str = Field(..., description="queued | preparing | ready | collected")


class FeedbackRequest(BaseModel):
    feedback: Optional[str] = Field(default="", max_length=1000)


class TokenVerifyRequest(BaseModel):
    token: str = Field(..., min_length=1, description="6-digit pickup token")


class MenuCreateRequest(BaseModel):
    canteen_id: str = Field(..., min_length=1)
    name: str       = Field(..., min_length=1, max_length=200)
    price: float    = Field(..., ge=0)
    available: bool = True


class MenuUpdateRequest(BaseModel):
    canteen_id: Optional[str] = Field(default=None, min_length=1)
    name:       Optional[str] = Field(default=None, min_length=1, max_length=200)
    price:      Optional[float] = Field(default=None, ge=0)
    available:  Optional[bool] = None


class UserCreateRequest(BaseModel):
    name: str       = Field(..., min_length=1)
    email: str      = Field(..., min_length=3)
    college_id: Optional[str] = None
    role: Role
    password: str   = Field(..., min_length=1)
    canteen_id: Optional[str] = None


# ── Response Models ────────────────────────────────────────────────────────────

class User(BaseModel):
    """User without its credential hash."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    college_id: Optional[str] = None
    role: Role
    canteen_id: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    user: User


class Canteen(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    location: str


class CanteenWithMenuCount(Canteen):
    menu_count: int = Field(default=0, description="Menu items owned by the canteen")


class MenuItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    canteen_id: str
    name: str
    price: float
    available: bool = True


class PaymentVerifyResponse(BaseModel):
    verified: bool
    payment_id: str


class LineItem(BaseModel):
    """Menu reference + quantity + price snapshot taken at order time."""
    model_config = ConfigDict(from_attributes=True)

    menu_id: str
    name: str
    quantity: int
    price: float


class Order(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    canteen_id: str
    items: List[LineItem]
    pickup_slot: str
    payment_id: str
    total: float
    status: OrderStatus
    numeric_token: str
    qr_code: str
    created_at: str
    feedback: str = ""


class TokenVerifyResponse(BaseModel):
    valid: bool
    order: Order


class DailySummary(BaseModel):
    orders: int
    sales: float
    collected: int


class PopularItem(BaseModel):
    name: str
    qty: int


class Overview(BaseModel):
    canteens: int
    total_orders: int
    total_sales: float
    peak_time: str = Field(description="Hour of day (0-23) with most orders, 'N/A' when none")
    popular_items: List[PopularItem]
