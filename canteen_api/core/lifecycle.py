"""
core/lifecycle.py – Order status state machine.

queued → preparing → ready → collected (terminal). Only the exact next
state is accepted.
"""
from enum import Enum
from typing import Optional, Union

from .errors import InvalidTransition


class OrderStatus(str, Enum):
    QUEUED    = "queued"
    PREPARING = "preparing"
    READY     = "ready"
    COLLECTED = "collected"


INITIAL_STATUS = OrderStatus.QUEUED

_NEXT: dict[OrderStatus, Optional[OrderStatus]] = {
    OrderStatus.QUEUED:    OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY:     OrderStatus.COLLECTED,
    OrderStatus.COLLECTED: None,
}


def next_status(current: OrderStatus) -> Optional[OrderStatus]:
    return _NEXT[OrderStatus(current)]


def advance(current: OrderStatus, requested: Union[OrderStatus, str, None]) -> OrderStatus:
    """Return the new status, or raise InvalidTransition naming the attempted move."""
    current   = OrderStatus(current)
    wanted    = requested.value if isinstance(requested, OrderStatus) else requested
    successor = next_status(current)
    if successor is None or wanted != successor.value:
        raise InvalidTransition(f"Invalid transition from {current.value} to {wanted}")
    return successor
