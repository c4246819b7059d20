# hoteldeck/desk/pricing.py
from .models import Booking, Room


def calculate_price_for_room(room: Room, booking: Booking):
    """Flat nightly rate. Returns (total, nights)."""
    nights = booking.nights
    total = room.price * nights
    return round(total, 2), nights
