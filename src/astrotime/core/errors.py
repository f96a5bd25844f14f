class AstrotimeError(Exception):
    """Base error."""

class TimeOverflowError(AstrotimeError, OverflowError):
    """Raised when a duration, instant or year leaves its representable range."""

class InvalidCalendarDateError(AstrotimeError, ValueError):
    """Raised when calendar fields are out of range for the given date."""

class BeforeLeapSecondEpochError(AstrotimeError, ValueError):
    """Raised when UTC is requested before the first leap-second table entry."""

class AmbiguousOrUnrepresentableError(AstrotimeError, ValueError):
    """Raised for a UTC second 60 that is not a recorded leap second."""
