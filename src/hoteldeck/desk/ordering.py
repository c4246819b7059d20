# hoteldeck/desk/ordering.py
from bisect import bisect_left
from operator import attrgetter
from typing import Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

_by_id = attrgetter("id")


def sort_by_id(items: Iterable[T]) -> List[T]:
    """Return a new list ordered by ``.id``. sorted() is stable, so equal ids keep input order."""
    return sorted(items, key=_by_id)


def binary_search(ordered: Sequence[T], entity_id: int) -> Optional[int]:
    """Index of the entity with ``entity_id`` in an id-sorted sequence, or None."""
    idx = bisect_left(ordered, entity_id, key=_by_id)
    if idx < len(ordered) and ordered[idx].id == entity_id:
        return idx
    return None
