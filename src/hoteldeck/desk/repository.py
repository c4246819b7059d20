# hoteldeck/desk/repository.py
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError

from .errors import (
    BookingNotFound,
    CustomerNotFound,
    DuplicateIdError,
    InvalidRecord,
    NotFoundError,
    ProtectedFieldChanged,
    RoomNotFound,
    describe_validation_error,
)
from .models import Booking, Customer, Room
from .ordering import binary_search, sort_by_id

T = TypeVar("T", Customer, Room, Booking)


class Repository(Generic[T]):
    """
    Owns one in-memory collection keyed by ``.id``.

    Lookups go through an id-sorted index that is rebuilt lazily: every
    add/delete marks it stale, and the next find/all re-sorts once. The
    same index drives listing order and persistence order.
    """

    kind = "Record"
    not_found: Type[NotFoundError] = NotFoundError
    # the id keys the sorted index, so it never changes after insert
    protected_fields: Tuple[str, ...] = ("id",)

    def __init__(self, entities=None):
        self._items: List[T] = []
        self._index: List[T] = []
        self._stale = False
        for entity in entities or ():
            self.add(entity)

    def __len__(self):
        return len(self._items)

    def __contains__(self, entity_id):
        return self.find_by_id(entity_id) is not None

    def __iter__(self) -> Iterator[T]:
        return self.all()

    def _sorted(self) -> List[T]:
        if self._stale:
            self._index = sort_by_id(self._items)
            self._stale = False
        return self._index

    def add(self, entity: T) -> T:
        if self.find_by_id(entity.id) is not None:
            raise DuplicateIdError(self.kind, entity.id)
        self._items.append(entity)
        self._stale = True
        return entity

    def find_by_id(self, entity_id: int) -> Optional[T]:
        index = self._sorted()
        pos = binary_search(index, entity_id)
        return index[pos] if pos is not None else None

    def get(self, entity_id: int) -> T:
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise self.not_found(entity_id)
        return entity

    def delete(self, entity_id: int) -> Optional[T]:
        entity = self.find_by_id(entity_id)
        if entity is None:
            return None
        self._items.remove(entity)
        self._stale = True
        return entity

    def update(self, entity_id: int, mutator: Callable[[T], None]) -> T:
        """
        Apply ``mutator`` to the stored entity in place. All-or-nothing: if the
        mutator fails validation or touches a protected field, every field is
        put back and a typed error is raised.
        """
        entity = self.get(entity_id)
        snapshot = entity.model_dump()
        try:
            mutator(entity)
        except ValidationError as e:
            entity.__dict__.update(snapshot)
            raise InvalidRecord(self.kind, entity_id, describe_validation_error(e)) from e
        for field in self.protected_fields:
            if getattr(entity, field) != snapshot[field]:
                entity.__dict__.update(snapshot)
                raise ProtectedFieldChanged(self.kind, entity_id, field)
        return entity

    def all(self) -> Iterator[T]:
        # iterate a snapshot so callers may delete while walking the listing
        return iter(list(self._sorted()))

    def filter(self, predicate: Callable[[T], bool]) -> Iterator[T]:
        return (entity for entity in self.all() if predicate(entity))

    def ids(self) -> List[int]:
        return [entity.id for entity in self._sorted()]

    def max_id(self) -> int:
        index = self._sorted()
        return index[-1].id if index else 0


class CustomerRepository(Repository[Customer]):
    kind = "Customer"
    not_found = CustomerNotFound


class RoomRepository(Repository[Room]):
    kind = "Room"
    not_found = RoomNotFound
    # booked is owned by HotelDesk
    protected_fields = ("id", "booked")


class BookingRepository(Repository[Booking]):
    kind = "Booking"
    not_found = BookingNotFound

    def for_customer(self, customer_id: int) -> Iterator[Booking]:
        return self.filter(lambda b: b.customer_id == customer_id)

    def booked_room_ids(self) -> Dict[int, int]:
        """room_id -> id of the booking holding it."""
        return {b.room_id: b.id for b in self._items}
