"""Shared fixtures for hoteldeck tests."""

from datetime import date

import pytest

from hoteldeck.desk import HotelDesk, HotelStore


@pytest.fixture
def store(tmp_path):
    return HotelStore(data_dir=str(tmp_path))


@pytest.fixture
def desk(store):
    """Desk with room 101 (Single, 1200/night), room 102 (Double, 2000/night) and customers 1 and 2."""
    d = HotelDesk(store)
    d.add_room(101, "Single", 1200)
    d.add_room(102, "Double", 2000)
    d.add_customer(1, "Alice", "alice@email.com", "5550100")
    d.add_customer(2, "Bob", "bob@email.com", "5550101")
    return d


@pytest.fixture
def may_first():
    return date(2024, 5, 1)


@pytest.fixture
def may_third():
    return date(2024, 5, 3)
