# hoteldeck/desk/__init__.py
from .booking_flow import HotelDesk
from .database import HotelStore
from .errors import (
    BookingNotFound,
    CustomerHasBookings,
    CustomerNotFound,
    DuplicateIdError,
    HotelDeskError,
    InvalidDateRange,
    InvalidRecord,
    MalformedRecord,
    NotFoundError,
    PersistenceError,
    ProtectedFieldChanged,
    RoomAlreadyBooked,
    RoomNotFound,
)
from .models import Booking, Customer, Room
from .repository import BookingRepository, CustomerRepository, Repository, RoomRepository
from .schemas import BillLine, BookingReceipt, CustomerBill, LoadReport
