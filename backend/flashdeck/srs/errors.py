"""Errors raised by the scheduling core."""


class SchedulingError(ValueError):
    """Base class for scheduler validation failures."""

    pass


class InvalidInput(SchedulingError):
    """Raised when a review event is outside its declared domain.

    Examples: an unknown difficulty label, an SM-2 quality outside 0-5,
    or a negative response time.
    """

    pass


class InvalidState(SchedulingError):
    """Raised when the supplied scheduling state violates its invariants."""

    pass
