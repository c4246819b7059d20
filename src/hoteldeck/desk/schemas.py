# hoteldeck/desk/schemas.py
from typing import Callable, Iterable, Iterator, List

from pydantic import BaseModel, ConfigDict, Field

from .errors import MalformedRecord
from .models import Booking, Customer


class BookingReceipt(BaseModel):
    booking: Booking
    nights: int
    total_cost: float


class BillLine(BaseModel):
    booking: Booking
    nights: int
    cost: float


class CustomerBill:
    """
    Bill for one customer. Iterating yields BillLine items lazily and can be
    repeated; ``total`` walks the lines again.
    """

    def __init__(self, customer: Customer, lines: Callable[[], Iterable[BillLine]]):
        self.customer = customer
        self._lines = lines

    def __iter__(self) -> Iterator[BillLine]:
        return iter(self._lines())

    @property
    def total(self) -> float:
        return round(sum(line.cost for line in self), 2)


class LoadReport(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    customers: int = 0
    rooms: int = 0
    bookings: int = 0
    warnings: List[MalformedRecord] = Field(default_factory=list)
