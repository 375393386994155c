"""User-facing validation errors.

Validation errors are raised before any state is touched. Not-found conditions
are never raised; callers get ``None`` or ``False`` back instead.
"""

from datetime import date


class TripValidationError(ValueError):
    """Base class for rejected user input."""


class MissingLocationError(TripValidationError):
    """Activity saved without a location name."""

    def __init__(self) -> None:
        super().__init__("location name is required")


class DateOutOfRangeError(TripValidationError):
    """Day jump to a date outside the trip range."""

    def __init__(self, requested: date, start: date, end: date) -> None:
        self.date = requested
        self.start = start
        self.end = end
        super().__init__(
            f"Please select a date between {start.isoformat()} and {end.isoformat()}."
        )


class MissingLabelError(TripValidationError):
    """Transfer saved without a label."""

    def __init__(self) -> None:
        super().__init__("transfer label is required")


class EmptyNameError(TripValidationError):
    """Packing or wishlist entry with a blank name."""

    def __init__(self, what: str) -> None:
        super().__init__(f"{what} name must not be blank")


class InvalidDateError(TripValidationError):
    """Date text that is not an ISO ``YYYY-MM-DD`` calendar date."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"{value!r} is not a valid date (expected YYYY-MM-DD)")
