"""Error taxonomy of the lending workflows.

Every error derives from ``ValueError`` so controllers can keep catching
``ValueError`` and turn it into ``{"success": False, "message": ...}``.
"""


class LendingError(ValueError):
    status_code = 400


class ValidationError(LendingError):
    status_code = 400


class UnauthorizedError(LendingError):
    status_code = 403

    def __init__(self, message="Unauthorized"):
        super().__init__(message)


class NotFoundError(LendingError):
    status_code = 404


class QuantityExceededError(LendingError):
    status_code = 400


class InsufficientStockError(LendingError):
    status_code = 400


class InvalidInventoryStateError(LendingError):
    status_code = 409

    def __init__(self, message="Inventory quantities would become invalid"):
        super().__init__(message)


class ConflictError(LendingError):
    status_code = 409

    def __init__(self, message="The record was changed by another request, please retry"):
        super().__init__(message)


class BackendFailureError(LendingError):
    status_code = 500

    def __init__(self, message="Operation failed"):
        super().__init__(message)
