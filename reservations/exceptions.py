"""
Business errors raised by the reservation engine.

Database failures are not wrapped here; they surface as
``django.db.DatabaseError`` and its subclasses.
"""


class ReservationError(Exception):
    """Base class for errors that are reported back to the caller for display."""

    code = "reservation_error"
    status_code = 409

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ReservationError):
    status_code = 404


class ReservationNotFound(NotFoundError):
    code = "reservation_not_found"


class TableNotFound(NotFoundError):
    code = "table_not_found"


class NoCapacityMatch(ReservationError):
    code = "no_capacity_match"

    def __init__(self, party_size: int) -> None:
        self.party_size = party_size
        super().__init__(f"No table can seat a party of {party_size}")


class NoTableAvailable(ReservationError):
    code = "no_table_available"

    def __init__(self, party_size: int) -> None:
        self.party_size = party_size
        super().__init__("No tables available for this party size and time slot")


class InsufficientCapacity(ReservationError):
    code = "insufficient_capacity"

    def __init__(self, table_number: int, capacity: int, party_size: int) -> None:
        self.table_number = table_number
        self.capacity = capacity
        self.party_size = party_size
        super().__init__(
            f"Table {table_number} has capacity {capacity}, but party size is {party_size}"
        )


class TableNotAvailable(ReservationError):
    code = "table_not_available"

    def __init__(self, table_number: int) -> None:
        self.table_number = table_number
        super().__init__(f"Table {table_number} is not available for the selected time slot")


class AssignmentNotAllowed(ReservationError):
    code = "assignment_not_allowed"

    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(f"Cannot assign a table to a {status} reservation")


class InvalidTransition(ReservationError):
    code = "invalid_transition"

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot change reservation status from {current} to {target}")
