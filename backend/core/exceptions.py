"""Domain exceptions raised by the table ledger."""


class LedgerError(Exception):
    """Base exception for all ledger errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['status'] = 'error'
        return rv


class NotFoundError(LedgerError):
    """Raised when a region, table, session or product does not exist."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)


class InvalidStateError(LedgerError):
    """Raised when an action is not allowed in the current session state."""
    def __init__(self, message, payload=None):
        super().__init__(message, 409, payload)


class ConstraintViolationError(LedgerError):
    """Raised when a write would break a uniqueness rule."""
    def __init__(self, message, payload=None):
        super().__init__(message, 409, payload)
