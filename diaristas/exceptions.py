"""Domain error taxonomy.

Validation and authorization errors abort an operation and reach the caller.
Dispatch and store-unavailability errors are absorbed where they occur.
"""


class DomainError(Exception):
    """Base class for errors raised by the service layer"""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(DomainError):
    """Malformed or missing required input"""


class NotFoundError(DomainError):
    """A referenced record does not resolve"""


class AuthorizationError(DomainError):
    """Caller lacks the role required for the operation"""


class DispatchError(DomainError):
    """A notification could not be delivered by the gateway"""


class StoreUnavailableError(DomainError):
    """Persistence is not configured"""
