# hoteldeck/desk/database.py
import logging
import os
from pathlib import Path
from typing import Container, Iterable, Optional

from hoteldeck.config import Config

from .codec import (
    ParseResult,
    dump_bookings,
    dump_customers,
    dump_rooms,
    parse_bookings,
    parse_customers,
    parse_rooms,
)
from .errors import PersistenceError
from .models import Booking, Customer, Room

logger = logging.getLogger(__name__)


class HotelStore:
    """The three data files. The running process is assumed to own them exclusively."""

    def __init__(
        self,
        data_dir: Optional[str] = None,
        customers_file: Optional[str] = None,
        rooms_file: Optional[str] = None,
        bookings_file: Optional[str] = None,
    ) -> None:
        self.data_dir = Path(data_dir if data_dir is not None else Config.DATA_DIR)
        self.customers_path = self.data_dir / (customers_file or Config.CUSTOMERS_FILE)
        self.rooms_path = self.data_dir / (rooms_file or Config.ROOMS_FILE)
        self.bookings_path = self.data_dir / (bookings_file or Config.BOOKINGS_FILE)

    def _read(self, path: Path) -> str:
        if not path.exists():
            logger.info("%s not found, starting with an empty collection", path)
            return ""
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.exception("Failed to read %s", path)
            raise PersistenceError(path, "read", str(e)) from e

    def _write(self, path: Path, text: str) -> None:
        try:
            os.makedirs(path.parent, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as fh:
                fh.write(text)
        except OSError as e:
            logger.exception("Failed to write %s", path)
            raise PersistenceError(path, "write", str(e)) from e
        logger.debug("Wrote %s", path)

    # ------------------------- load -------------------------

    def load_customers(self) -> ParseResult:
        return parse_customers(self._read(self.customers_path), source=self.customers_path.name)

    def load_rooms(self) -> ParseResult:
        return parse_rooms(self._read(self.rooms_path), source=self.rooms_path.name)

    def load_bookings(self, customer_ids: Container[int], room_ids: Container[int]) -> ParseResult:
        return parse_bookings(
            self._read(self.bookings_path), customer_ids, room_ids, source=self.bookings_path.name
        )

    # ------------------------- save -------------------------

    def save_customers(self, customers: Iterable[Customer]) -> None:
        self._write(self.customers_path, dump_customers(customers))

    def save_rooms(self, rooms: Iterable[Room]) -> None:
        self._write(self.rooms_path, dump_rooms(rooms))

    def save_bookings(self, bookings: Iterable[Booking]) -> None:
        self._write(self.bookings_path, dump_bookings(bookings))
