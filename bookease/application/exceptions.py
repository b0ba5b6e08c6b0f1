class BookingInvariantError(RuntimeError):
    """Raised when confirmation runs on an incomplete booking state."""
    pass


class BookingNotFoundError(LookupError):
    """Raised when a ledger operation targets an unknown booking id."""
    pass


class BookingNotEligibleError(RuntimeError):
    """Raised when a booking can no longer be changed (status or notice period)."""
    pass


class CourseNotFoundError(LookupError):
    pass


class AuthenticationError(RuntimeError):
    """Raised on invalid user or admin credentials."""
    pass


class DuplicateUserError(RuntimeError):
    pass


class CustomerValidationError(ValueError):
    """Customer details failed form validation; `errors` maps field to message."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = dict(errors)


class ScheduleNotFoundError(LookupError):
    pass


class TermNotFoundError(LookupError):
    pass


class ScheduleFullError(RuntimeError):
    """Raised when enrolling into a schedule with no spots left."""
    pass
