class InvalidTimeFormat(ValueError):
    """Raised when a time string is not a well-formed 24h or 12h wall-clock time."""
    pass


class BookingValidationError(ValueError):
    """Raised when a booking draft is missing a required field."""
    pass


class AuthenticationError(RuntimeError):
    """Raised when login credentials are rejected."""
    pass


class ClinicApiError(RuntimeError):
    """Raised when the clinic backend fails (network errors, non-2xx responses)."""

    def __init__(self, message: str, status_code: int | None = None, resource: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.resource = resource
