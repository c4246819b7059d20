# hoteldeck/desk/codec.py
"""
Text codec for the three data files.

Each file is a header row followed by one comma-separated row per entity,
always written in ascending id order so that save -> load -> save gives the
same bytes. Parsing never aborts on a bad row: the row is dropped and a
MalformedRecord is collected for the caller to report.
"""
import csv
import io
import logging
from typing import Callable, Container, Dict, Iterable, List, NamedTuple, Optional

import pandas as pd
from pydantic import ValidationError

from .errors import MalformedRecord, describe_validation_error
from .models import Booking, Customer, Room
from .ordering import sort_by_id

logger = logging.getLogger(__name__)

CUSTOMER_COLUMNS = ["id", "name", "email", "phone"]
ROOM_COLUMNS = ["id", "type", "price", "isBooked"]
BOOKING_COLUMNS = ["id", "roomId", "customerId", "checkInDate", "checkOutDate"]


class ParseResult(NamedTuple):
    records: list
    warnings: List[MalformedRecord]


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _parse_bool(token: str) -> bool:
    token = token.lower()
    if token == "true":
        return True
    if token == "false":
        return False
    raise ValueError(f"expected true/false, got {token!r}")


def _to_csv(columns: List[str], rows: List[List[str]]) -> str:
    df = pd.DataFrame(rows, columns=columns, dtype=str)
    return df.to_csv(index=False, lineterminator="\n")


# ------------------------- dump -------------------------

def dump_customers(customers: Iterable[Customer]) -> str:
    rows = [[str(c.id), c.name, c.email, c.phone] for c in sort_by_id(customers)]
    return _to_csv(CUSTOMER_COLUMNS, rows)


def dump_rooms(rooms: Iterable[Room]) -> str:
    rows = [[str(r.id), r.room_type, str(float(r.price)), _format_bool(r.booked)] for r in sort_by_id(rooms)]
    return _to_csv(ROOM_COLUMNS, rows)


def dump_bookings(bookings: Iterable[Booking]) -> str:
    rows = [
        [str(b.id), str(b.room_id), str(b.customer_id), b.check_in.isoformat(), b.check_out.isoformat()]
        for b in sort_by_id(bookings)
    ]
    return _to_csv(BOOKING_COLUMNS, rows)


# ------------------------- parse -------------------------

def _reason(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return describe_validation_error(exc)
    return str(exc)


def _parse_rows(
    text: str,
    source: str,
    columns: List[str],
    build: Callable[[List[str]], object],
    check: Optional[Callable[[object], Optional[str]]] = None,
) -> ParseResult:
    records = []
    warnings: List[MalformedRecord] = []
    seen_ids = set()

    def skip(line_no, reason, raw):
        record = MalformedRecord(source, line_no, reason, raw)
        logger.warning("Skipping row: %s", record)
        warnings.append(record)

    reader = csv.reader(io.StringIO(text or ""))
    for line_no, fields in enumerate(reader, start=1):
        if line_no == 1:
            # header wording is cosmetic (legacy files say phoneNumber)
            continue
        if not fields or all(not f.strip() for f in fields):
            continue
        raw = ",".join(fields)
        if len(fields) != len(columns):
            skip(line_no, f"expected {len(columns)} fields, got {len(fields)}", raw)
            continue
        try:
            entity = build(fields)
        except (ValueError, ValidationError) as e:
            skip(line_no, _reason(e), raw)
            continue
        if entity.id in seen_ids:
            skip(line_no, f"duplicate id {entity.id}", raw)
            continue
        problem = check(entity) if check else None
        if problem:
            skip(line_no, problem, raw)
            continue
        seen_ids.add(entity.id)
        records.append(entity)
    return ParseResult(records, warnings)


def parse_customers(text: str, source: str = "customers") -> ParseResult:
    def build(fields):
        customer_id, name, email, phone = fields
        # text columns are kept byte for byte
        return Customer.model_validate({"id": customer_id.strip(), "name": name, "email": email, "phone": phone})

    return _parse_rows(text, source, CUSTOMER_COLUMNS, build)


def parse_rooms(text: str, source: str = "rooms") -> ParseResult:
    def build(fields):
        room_id, room_type, price, booked = fields
        return Room.model_validate(
            {
                "id": room_id.strip(),
                "room_type": room_type,
                "price": price.strip(),
                "booked": _parse_bool(booked.strip()),
            }
        )

    return _parse_rows(text, source, ROOM_COLUMNS, build)


def parse_bookings(
    text: str,
    customer_ids: Container[int],
    room_ids: Container[int],
    source: str = "bookings",
) -> ParseResult:
    """
    Customers and rooms must already be loaded: a booking whose customer or
    room is unknown is skipped, and so is a second booking for a room that an
    earlier row already holds.
    """
    holders: Dict[int, int] = {}

    def build(fields):
        booking_id, room_id, customer_id, check_in, check_out = fields
        return Booking.model_validate(
            {
                "id": booking_id.strip(),
                "room_id": room_id.strip(),
                "customer_id": customer_id.strip(),
                "check_in": check_in.strip(),
                "check_out": check_out.strip(),
            }
        )

    def check(booking):
        if booking.room_id not in room_ids:
            return f"room {booking.room_id} does not exist"
        if booking.customer_id not in customer_ids:
            return f"customer {booking.customer_id} does not exist"
        if booking.room_id in holders:
            return f"room {booking.room_id} already held by booking {holders[booking.room_id]}"
        holders[booking.room_id] = booking.id
        return None

    return _parse_rows(text, source, BOOKING_COLUMNS, build, check)
