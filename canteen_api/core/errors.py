"""
core/errors.py – Domain error types.
Each error carries the HTTP status the routes translate it to.
"""


class CanteenError(Exception):
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequest(CanteenError):
    status_code = 400


class InvalidTransition(InvalidRequest):
    """Requested order status is not the exact successor of the current one."""


class Unauthorized(CanteenError):
    status_code = 401


class Forbidden(CanteenError):
    status_code = 403


class NotFound(CanteenError):
    status_code = 404
