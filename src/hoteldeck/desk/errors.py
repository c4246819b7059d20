# hoteldeck/desk/errors.py
"""Typed failures raised by the desk core.

Everything derives from HotelDeskError so a front end can catch one type,
render ``str(exc)`` and re-prompt.
"""
from pydantic import ValidationError


def describe_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'row'}: {err['msg']}" for err in exc.errors()
    )


class HotelDeskError(Exception):
    pass


class DuplicateIdError(HotelDeskError):
    def __init__(self, kind: str, entity_id: int):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} already exists")


class NotFoundError(HotelDeskError):
    kind = "Record"

    def __init__(self, entity_id: int):
        self.entity_id = entity_id
        super().__init__(f"{self.kind} {entity_id} not found")


class CustomerNotFound(NotFoundError):
    kind = "Customer"


class RoomNotFound(NotFoundError):
    kind = "Room"


class BookingNotFound(NotFoundError):
    kind = "Booking"


class RoomAlreadyBooked(HotelDeskError):
    def __init__(self, room_id: int):
        self.room_id = room_id
        super().__init__(f"Room {room_id} is already booked")


class InvalidRecord(HotelDeskError):
    """A field value the record itself does not accept (e.g. a non-positive price)."""

    def __init__(self, kind: str, entity_id, reason: str):
        self.kind = kind
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"Invalid {kind.lower()} {entity_id}: {reason}")


class ProtectedFieldChanged(HotelDeskError):
    def __init__(self, kind: str, entity_id: int, field: str):
        self.kind = kind
        self.entity_id = entity_id
        self.field = field
        super().__init__(f"{kind} {entity_id}: {field} cannot be changed through update")


class InvalidDateRange(HotelDeskError):
    def __init__(self, check_in, check_out):
        self.check_in = check_in
        self.check_out = check_out
        super().__init__(f"check_out ({check_out}) must be after check_in ({check_in})")


class CustomerHasBookings(HotelDeskError):
    def __init__(self, customer_id: int, booking_ids):
        self.customer_id = customer_id
        self.booking_ids = list(booking_ids)
        super().__init__(
            f"Customer {customer_id} still has active bookings: "
            + ", ".join(str(b) for b in self.booking_ids)
        )


class PersistenceError(HotelDeskError):
    def __init__(self, path, action: str, reason: str):
        self.path = str(path)
        self.action = action
        super().__init__(f"Could not {action} {self.path}: {reason}")


class MalformedRecord(HotelDeskError):
    """A data row that was skipped during load. Collected, never raised out of a load."""

    def __init__(self, source: str, line_no: int, reason: str, raw: str = ""):
        self.source = source
        self.line_no = line_no
        self.reason = reason
        self.raw = raw
        super().__init__(f"{source} line {line_no}: {reason}")
