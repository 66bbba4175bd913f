# backend/services/errors.py
"""Exceptions raised by the point-of-sale core.

Routers never see partial state: every exception below is raised before the
controller swaps in new collections.
"""


class PosError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationRejected(PosError):
    """Input failed validation; nothing was changed."""
    status_code = 400


class InsufficientStock(ValidationRejected):
    pass


class PreconditionFailed(PosError):
    """The operation is not allowed in the current shift or cart state."""
    status_code = 409


class NoActiveShift(PreconditionFailed):
    def __init__(self, detail: str = "No active shift. Please open a shift first."):
        super().__init__(detail)


class ShiftAlreadyOpen(PreconditionFailed):
    def __init__(self, detail: str = "A shift is already open"):
        super().__init__(detail)


class EmptyCart(PreconditionFailed):
    def __init__(self, detail: str = "Cart is empty"):
        super().__init__(detail)


class NotFound(PosError):
    status_code = 404


class AuthenticationFailed(PosError):
    status_code = 401

    def __init__(self, detail: str = "Invalid username or password"):
        super().__init__(detail)
