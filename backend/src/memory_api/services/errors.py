class MemoryApiError(Exception):
    """Base class for domain errors raised by the service layer."""


class InputValidationError(MemoryApiError, ValueError):
    """Malformed or missing input. Raised before any store access."""


class AuthError(MemoryApiError):
    """Bad credentials or an invalid/expired token."""


class AccountExistsError(MemoryApiError):
    pass
