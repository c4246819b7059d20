"""Tests for the booking lifecycle on HotelDesk."""

from datetime import date

import pytest

from hoteldeck.desk import (
    BookingNotFound,
    CustomerHasBookings,
    CustomerNotFound,
    DuplicateIdError,
    HotelDesk,
    InvalidDateRange,
    InvalidRecord,
    PersistenceError,
    ProtectedFieldChanged,
    RoomAlreadyBooked,
    RoomNotFound,
)


def _assert_flags_match_bookings(desk):
    held = {b.room_id for b in desk.list_bookings()}
    for room in desk.list_rooms():
        assert room.booked == (room.id in held)


class TestCreateBooking:
    def test_missing_room_checked_before_customer(self, store, may_first, may_third):
        empty = HotelDesk(store)
        with pytest.raises(RoomNotFound):
            empty.create_booking(1, 101, may_first, may_third)
        assert list(empty.list_bookings()) == []

    def test_missing_customer(self, desk, may_first, may_third):
        with pytest.raises(CustomerNotFound):
            desk.create_booking(99, 101, may_first, may_third)
        assert not desk.rooms.get(101).booked

    def test_success_returns_nights_and_cost(self, desk, may_first, may_third):
        receipt = desk.create_booking(1, 101, may_first, may_third)
        assert receipt.nights == 2
        assert receipt.total_cost == 2400
        assert receipt.booking.id == 1
        assert desk.rooms.get(101).booked
        _assert_flags_match_bookings(desk)

    def test_room_already_booked_leaves_state_unchanged(self, desk, may_first, may_third):
        desk.create_booking(1, 101, may_first, may_third)
        with pytest.raises(RoomAlreadyBooked):
            desk.create_booking(2, 101, date(2024, 6, 1), date(2024, 6, 2))
        assert [b.id for b in desk.list_bookings()] == [1]
        assert desk.next_booking_id == 2
        _assert_flags_match_bookings(desk)

    def test_invalid_date_range(self, desk, may_first, may_third):
        with pytest.raises(InvalidDateRange):
            desk.create_booking(1, 101, may_third, may_first)
        with pytest.raises(InvalidDateRange):
            desk.create_booking(1, 101, may_first, may_first)
        assert list(desk.list_bookings()) == []
        assert not desk.rooms.get(101).booked

    def test_persists_bookings_and_rooms(self, desk, store, may_first, may_third):
        desk.create_booking(1, 101, may_first, may_third)
        assert "1,101,1,2024-05-01,2024-05-03" in store.bookings_path.read_text()
        assert "101,Single,1200.0,true" in store.rooms_path.read_text()


class TestCancelBooking:
    def test_cancel_frees_room(self, desk, may_first, may_third):
        booking = desk.create_booking(1, 101, may_first, may_third).booking
        cancelled = desk.cancel_booking(booking.id)
        assert cancelled.id == booking.id
        assert not desk.rooms.get(101).booked
        assert list(desk.list_bookings()) == []

    def test_cancel_twice(self, desk, may_first, may_third):
        booking = desk.create_booking(1, 101, may_first, may_third).booking
        desk.cancel_booking(booking.id)
        with pytest.raises(BookingNotFound):
            desk.cancel_booking(booking.id)

    def test_ids_never_reused_after_cancel(self, desk, may_first, may_third):
        first = desk.create_booking(1, 101, may_first, may_third).booking
        desk.cancel_booking(first.id)
        second = desk.create_booking(1, 101, may_first, may_third).booking
        third = desk.create_booking(2, 102, may_first, may_third).booking
        assert first.id < second.id < third.id
        assert second.id == 2

    def test_cancel_persists(self, desk, store, may_first, may_third):
        booking = desk.create_booking(1, 101, may_first, may_third).booking
        desk.cancel_booking(booking.id)
        assert store.bookings_path.read_text() == "id,roomId,customerId,checkInDate,checkOutDate\n"
        assert "101,Single,1200.0,false" in store.rooms_path.read_text()


class TestBill:
    def test_bill_lines_and_total(self, desk, may_first, may_third):
        desk.create_booking(1, 101, may_first, may_third)
        desk.create_booking(1, 102, may_first, date(2024, 5, 4))
        bill = desk.bill_for(1)
        lines = list(bill)
        assert [(line.booking.room_id, line.nights, line.cost) for line in lines] == [
            (101, 2, 2400.0),
            (102, 3, 6000.0),
        ]
        assert bill.total == 8400.0
        # restartable
        assert len(list(bill)) == 2

    def test_empty_bill(self, desk):
        bill = desk.bill_for(2)
        assert list(bill) == []
        assert bill.total == 0

    def test_unknown_customer(self, desk):
        with pytest.raises(CustomerNotFound):
            desk.bill_for(404)


class TestCustomersAndRooms:
    def test_duplicate_customer(self, desk):
        with pytest.raises(DuplicateIdError):
            desk.add_customer(1, "Again", "again@email.com", "1")

    def test_update_customer(self, desk, store):
        desk.update_customer(2, email="robert@email.com")
        assert desk.customers.get(2).email == "robert@email.com"
        assert desk.customers.get(2).name == "Bob"
        assert "robert@email.com" in store.customers_path.read_text()

    def test_delete_customer_with_bookings_rejected(self, desk, may_first, may_third):
        desk.create_booking(1, 101, may_first, may_third)
        with pytest.raises(CustomerHasBookings) as exc:
            desk.delete_customer(1)
        assert exc.value.booking_ids == [1]
        assert 1 in desk.customers

    def test_delete_customer(self, desk):
        desk.delete_customer(2)
        assert 2 not in desk.customers
        with pytest.raises(CustomerNotFound):
            desk.delete_customer(2)

    def test_update_room_price(self, desk):
        desk.update_room(101, price=1500)
        assert desk.rooms.get(101).price == 1500.0
        assert desk.rooms.get(101).room_type == "Single"

    def test_delete_booked_room_rejected(self, desk, may_first, may_third):
        desk.create_booking(1, 101, may_first, may_third)
        with pytest.raises(RoomAlreadyBooked):
            desk.delete_room(101)
        desk.delete_room(102)
        assert [r.id for r in desk.list_rooms()] == [101]

    def test_search_rooms_by_type(self, desk, may_first, may_third):
        desk.add_room(103, "single", 900)
        assert [r.id for r in desk.search_rooms_by_type("SINGLE")] == [101, 103]
        desk.create_booking(1, 101, may_first, may_third)
        assert [r.id for r in desk.search_rooms_by_type("Single")] == [103]
        assert desk.search_rooms_by_type("Penthouse") == []

    def test_available_rooms(self, desk, may_first, may_third):
        desk.create_booking(1, 102, may_first, may_third)
        assert [r.id for r in desk.available_rooms()] == [101]

    def test_bookings_by_check_in(self, desk, may_first, may_third):
        desk.create_booking(1, 101, date(2024, 7, 1), date(2024, 7, 5))
        desk.create_booking(2, 102, may_first, may_third)
        assert [b.id for b in desk.bookings_by_check_in()] == [2, 1]
        assert [b.id for b in desk.bookings_for_customer(2)] == [2]


class TestPersistenceFailure:
    def test_failed_save_keeps_memory(self, desk, store, tmp_path, may_first, may_third):
        blocked = tmp_path / "blocked"
        blocked.mkdir()
        store.bookings_path = blocked  # a directory cannot be opened for writing
        with pytest.raises(PersistenceError):
            desk.create_booking(1, 101, may_first, may_third)
        assert [b.id for b in desk.list_bookings()] == [1]
        assert desk.rooms.get(101).booked
        # the rooms file was still written
        assert "101,Single,1200.0,true" in store.rooms_path.read_text()


class TestFieldRules:
    def test_update_room_bad_price_is_typed(self, desk, store):
        before = store.rooms_path.read_text()
        with pytest.raises(InvalidRecord) as exc:
            desk.update_room(101, room_type="Deluxe", price=0)
        assert exc.value.entity_id == 101
        room = desk.rooms.get(101)
        assert (room.room_type, room.price) == ("Single", 1200.0)
        assert store.rooms_path.read_text() == before

    def test_add_room_bad_price_is_typed(self, desk):
        with pytest.raises(InvalidRecord):
            desk.add_room(104, "Suite", -1)
        assert 104 not in desk.rooms

    def test_rooms_repository_cannot_book_behind_the_desk(self, desk):
        with pytest.raises(ProtectedFieldChanged):
            desk.rooms.update(101, lambda r: setattr(r, "booked", True))
        assert not desk.rooms.get(101).booked
        assert [r.id for r in desk.available_rooms()] == [101, 102]
