import typing
from .types import *

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable

def from_iterable(data: Iterable[T]) -> 'Enumerable[T]':
    """
    create a sync enumerable from an iterable.
    every traversal calls iter(data) again, so lists and ranges can be walked
    repeatedly while generators are consumed once.
    """
    from .enumerable import Enumerable
    return Enumerable(iter_func=lambda: iter(data))

def from_async_iterable(data: AsyncIterable[T]) -> 'Enumerable[T]':
    """create an async-only enumerable from an async iterable"""
    from .enumerable import Enumerable
    return Enumerable(aiter_func=lambda: aiter(data))

def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable from range"""
    from .enumerable import Enumerable
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return Enumerable(iter_func=lambda: iter(range(start, start + count)))

def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with repeated item"""
    from .enumerable import Enumerable
    return Enumerable(iter_func=lambda: iter([item] * count))

def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    from .enumerable import Enumerable
    return Enumerable(iter_func=lambda: iter(()))

# --- aliases ---
qinn = from_iterable
Q = from_iterable
