# seed_rooms.py
import logging
from typing import Optional

from hoteldeck.config import Config
from hoteldeck.desk import HotelDesk, HotelStore
from hoteldeck.logger import setup_logger

logger = logging.getLogger(__name__)

sample_rooms = [
    {"id": 101, "room_type": "Single", "price": 1200},
    {"id": 102, "room_type": "Double", "price": 2000},
    {"id": 103, "room_type": "Suite", "price": 5000},
]

sample_customers = [
    {"id": 1, "name": "Alice", "email": "alice@email.com", "phone": "5550100"},
    {"id": 2, "name": "Bob", "email": "bob@email.com", "phone": "5550101"},
]


def seed_sample_data(desk: HotelDesk) -> int:
    """Add the sample rooms and customers whose ids are not taken yet. Returns how many were added."""
    added = 0
    for data in sample_rooms:
        if desk.rooms.find_by_id(data["id"]) is None:
            desk.add_room(data["id"], data["room_type"], data["price"])
            added += 1
    for data in sample_customers:
        if desk.customers.find_by_id(data["id"]) is None:
            desk.add_customer(data["id"], data["name"], data["email"], data["phone"])
            added += 1
    logger.info("Seeded %s sample records", added)
    return added


def open_desk(data_dir: Optional[str] = None, seed: Optional[bool] = None) -> HotelDesk:
    """Load the desk from the data files once at startup."""
    setup_logger("hoteldeck")
    desk = HotelDesk(HotelStore(data_dir))
    desk.load()
    if Config.SEED_SAMPLE_DATA if seed is None else seed:
        seed_sample_data(desk)
    return desk


if __name__ == "__main__":
    open_desk(seed=True)
    print("Seeded Hotel Deck sample data.")
