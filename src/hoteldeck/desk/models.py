# hoteldeck/desk/models.py
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Customer(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int
    name: str
    email: str
    phone: str


class Room(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int
    room_type: str
    price: float = Field(gt=0)  # per night
    # derived from the booking ledger; only HotelDesk flips it
    booked: bool = False


class Booking(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int
    customer_id: int
    room_id: int
    check_in: date
    check_out: date  # exclusive

    @model_validator(mode="after")
    def _check_out_after_check_in(self):
        if not self.check_out > self.check_in:
            raise ValueError("check_out must be after check_in")
        return self

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days
