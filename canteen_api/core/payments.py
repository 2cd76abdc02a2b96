"""
core/payments.py – PaymentVerifier class.
One-shot method whitelist check that hands out a payment reference.
The reference is stored on the order and never re-validated.
"""
import logging
import uuid

from ..models import PaymentVerifyResponse
from .errors import InvalidRequest

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = frozenset({"UPI", "CARD", "WALLET"})


class PaymentVerifier:

    def __init__(self, methods=SUPPORTED_METHODS) -> None:
        self._methods = frozenset(methods)

    def verify(self, method: str) -> PaymentVerifyResponse:
        if method not in self._methods:
            logger.info("[Payments] rejected method %r", method)
            raise InvalidRequest("Unsupported payment method")
        return PaymentVerifyResponse(verified=True, payment_id=f"pay_{uuid.uuid4()}")
