import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    # ------------------------
    # Data files
    # ------------------------
    DATA_DIR = os.getenv("HOTELDECK_DATA_DIR", "data")
    CUSTOMERS_FILE = os.getenv("HOTELDECK_CUSTOMERS_FILE", "customers.csv")
    ROOMS_FILE = os.getenv("HOTELDECK_ROOMS_FILE", "rooms.csv")
    BOOKINGS_FILE = os.getenv("HOTELDECK_BOOKINGS_FILE", "bookings.csv")

    # ------------------------
    # Logging
    # ------------------------
    LOG_FILE = os.getenv("HOTELDECK_LOG_FILE", "")
    LOG_LEVEL = os.getenv("HOTELDECK_LOG_LEVEL", "INFO").upper()

    # ------------------------
    # Sample data on first start
    # ------------------------
    SEED_SAMPLE_DATA = _flag("HOTELDECK_SEED_SAMPLE_DATA")
