# hoteldeck/desk/booking_flow.py
import logging
from datetime import date
from typing import Iterator, List, Optional

from pydantic import ValidationError

from .database import HotelStore
from .errors import (
    CustomerHasBookings,
    InvalidDateRange,
    InvalidRecord,
    PersistenceError,
    RoomAlreadyBooked,
    describe_validation_error,
)
from .models import Booking, Customer, Room
from .pricing import calculate_price_for_room
from .repository import BookingRepository, CustomerRepository, RoomRepository
from .schemas import BillLine, BookingReceipt, CustomerBill, LoadReport

logger = logging.getLogger(__name__)


class HotelDesk:
    """
    Front desk over the three repositories.

    Room.booked is a view over the booking ledger: it is only ever changed
    here, by create_booking / cancel_booking (and re-derived on load), so the
    flag and the ledger cannot drift apart. Every mutating call writes the
    files it touched before returning; a failed write raises PersistenceError
    but the in-memory change stays.
    """

    def __init__(self, store: HotelStore):
        self.store = store
        self.customers = CustomerRepository()
        self.rooms = RoomRepository()
        self.bookings = BookingRepository()
        self._next_booking_id = 1

    # ------------------------- persistence -------------------------

    def _persist(self, *targets: str) -> None:
        savers = {
            "customers": lambda: self.store.save_customers(self.customers.all()),
            "rooms": lambda: self.store.save_rooms(self.rooms.all()),
            "bookings": lambda: self.store.save_bookings(self.bookings.all()),
        }
        first_error: Optional[PersistenceError] = None
        for target in targets:
            try:
                savers[target]()
            except PersistenceError as e:
                # keep going so the other file still gets its chance
                first_error = first_error or e
        if first_error is not None:
            raise first_error

    def save(self) -> None:
        self._persist("customers", "rooms", "bookings")

    def load(self) -> LoadReport:
        """Replace memory with the file contents. Customers and rooms load before bookings."""
        report = LoadReport()

        customers = self.store.load_customers()
        rooms = self.store.load_rooms()
        customer_repo = CustomerRepository(customers.records)
        room_repo = RoomRepository(rooms.records)
        bookings = self.store.load_bookings(customer_repo, room_repo)

        self.customers = customer_repo
        self.rooms = room_repo
        self.bookings = BookingRepository(bookings.records)

        self._relink_rooms()
        self._next_booking_id = self.bookings.max_id() + 1

        report.customers = len(self.customers)
        report.rooms = len(self.rooms)
        report.bookings = len(self.bookings)
        report.warnings = customers.warnings + rooms.warnings + bookings.warnings
        logger.info(
            "Loaded %s customers, %s rooms, %s bookings (%s rows skipped)",
            report.customers, report.rooms, report.bookings, len(report.warnings),
        )
        return report

    def _relink_rooms(self) -> None:
        held = self.bookings.booked_room_ids()
        for room in self.rooms.all():
            booked = room.id in held
            if room.booked != booked:
                logger.warning(
                    "Room %s was stored as booked=%s, correcting to %s from bookings",
                    room.id, room.booked, booked,
                )
                room.booked = booked

    # ------------------------- customers -------------------------

    def add_customer(self, customer_id: int, name: str, email: str, phone: str) -> Customer:
        try:
            customer = Customer(id=customer_id, name=name, email=email, phone=phone)
        except ValidationError as e:
            raise InvalidRecord("Customer", customer_id, describe_validation_error(e)) from e
        self.customers.add(customer)
        logger.info("Added customer %s", customer_id)
        self._persist("customers")
        return customer

    def update_customer(self, customer_id: int, name=None, email=None, phone=None) -> Customer:
        def apply(customer: Customer):
            if name is not None:
                customer.name = name
            if email is not None:
                customer.email = email
            if phone is not None:
                customer.phone = phone

        customer = self.customers.update(customer_id, apply)
        self._persist("customers")
        return customer

    def delete_customer(self, customer_id: int) -> Customer:
        """Refuses while the customer still holds bookings; cancel those first."""
        customer = self.customers.get(customer_id)
        active = [b.id for b in self.bookings.for_customer(customer_id)]
        if active:
            raise CustomerHasBookings(customer_id, active)
        self.customers.delete(customer_id)
        logger.info("Deleted customer %s", customer_id)
        self._persist("customers")
        return customer

    def list_customers(self) -> Iterator[Customer]:
        return self.customers.all()

    # ------------------------- rooms -------------------------

    def add_room(self, room_id: int, room_type: str, price: float) -> Room:
        try:
            room = Room(id=room_id, room_type=room_type, price=price)
        except ValidationError as e:
            raise InvalidRecord("Room", room_id, describe_validation_error(e)) from e
        self.rooms.add(room)
        logger.info("Added room %s (%s @ %s)", room_id, room_type, price)
        self._persist("rooms")
        return room

    def update_room(self, room_id: int, room_type=None, price=None) -> Room:
        def apply(room: Room):
            if price is not None:
                room.price = price
            if room_type is not None:
                room.room_type = room_type

        room = self.rooms.update(room_id, apply)
        self._persist("rooms")
        return room

    def delete_room(self, room_id: int) -> Room:
        room = self.rooms.get(room_id)
        if room.booked:
            raise RoomAlreadyBooked(room_id)
        self.rooms.delete(room_id)
        logger.info("Deleted room %s", room_id)
        self._persist("rooms")
        return room

    def list_rooms(self) -> Iterator[Room]:
        return self.rooms.all()

    def available_rooms(self) -> Iterator[Room]:
        return self.rooms.filter(lambda r: not r.booked)

    def search_rooms_by_type(self, room_type: str) -> List[Room]:
        wanted = room_type.strip().lower()
        return list(self.rooms.filter(lambda r: not r.booked and r.room_type.lower() == wanted))

    # ------------------------- bookings -------------------------

    def create_booking(self, customer_id: int, room_id: int, check_in: date, check_out: date) -> BookingReceipt:
        room = self.rooms.get(room_id)
        customer = self.customers.get(customer_id)
        if room.booked:
            raise RoomAlreadyBooked(room_id)
        if not check_out > check_in:
            raise InvalidDateRange(check_in, check_out)

        booking = Booking(
            id=self._next_booking_id,
            customer_id=customer.id,
            room_id=room.id,
            check_in=check_in,
            check_out=check_out,
        )
        total, nights = calculate_price_for_room(room, booking)

        self.bookings.add(booking)
        self._next_booking_id += 1
        room.booked = True
        logger.info("Booking %s: room %s for customer %s, %s nights", booking.id, room.id, customer.id, nights)

        self._persist("bookings", "rooms")
        return BookingReceipt(booking=booking, nights=nights, total_cost=total)

    def cancel_booking(self, booking_id: int) -> Booking:
        booking = self.bookings.get(booking_id)
        self.bookings.delete(booking_id)
        room = self.rooms.find_by_id(booking.room_id)
        if room is not None:
            room.booked = False
        logger.info("Cancelled booking %s, room %s is available", booking_id, booking.room_id)

        self._persist("bookings", "rooms")
        return booking

    def list_bookings(self) -> Iterator[Booking]:
        return self.bookings.all()

    def bookings_by_check_in(self) -> List[Booking]:
        return sorted(self.bookings.all(), key=lambda b: (b.check_in, b.id))

    def bookings_for_customer(self, customer_id: int) -> List[Booking]:
        self.customers.get(customer_id)
        return list(self.bookings.for_customer(customer_id))

    def bill_for(self, customer_id: int) -> CustomerBill:
        customer = self.customers.get(customer_id)

        def lines():
            for booking in self.bookings.for_customer(customer_id):
                room = self.rooms.get(booking.room_id)
                cost, nights = calculate_price_for_room(room, booking)
                yield BillLine(booking=booking, nights=nights, cost=cost)

        return CustomerBill(customer, lines)

    @property
    def next_booking_id(self) -> int:
        return self._next_booking_id
