"""
Domain errors raised by the ledger services.

Each error carries the HTTP status the API layer answers with, so the
handler in ``bucketbook.main`` stays a one-liner. Buckets owned by another
user are looked up through the owner's id and come back as NotFoundError,
so their existence never leaks.
"""


class BudgetError(Exception):
    """Base class for every ledger failure"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BudgetError):
    status_code = 404


class InvalidInputError(BudgetError):
    status_code = 400


class InvalidAmountError(InvalidInputError):
    """Amount is not a number or not positive"""


class InvalidTransferError(InvalidInputError):
    """Transfer type or bucket pairing is not allowed"""


class InsufficientFundsError(BudgetError):
    status_code = 400

    def __init__(self, available, message: str = None):
        self.available = available
        super().__init__(message or f"Insufficient funds. Available: ${available}")


class ConflictError(BudgetError):
    status_code = 409
