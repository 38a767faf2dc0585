import json
from enum import Enum
from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, AsyncIterator, AsyncIterable,
    Awaitable, Any, Optional, Union, Dict, List, Tuple, Set, Hashable
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
AsyncSelector = Callable[[T], Union[Awaitable[U], U]]
IteratorFactory = Callable[[], Iterator[T]]
AsyncIteratorFactory = Callable[[], AsyncIterator[T]]

_PRIMITIVES = (type(None), bool, int, float, complex, str, bytes)


class Capability(Enum):
    """pull capability of a sequence, fixed when the sequence is built"""
    SYNC = 'sync'
    ASYNC = 'async'


class ModeMismatchError(TypeError):
    """raised when a synchronous pull is attempted on an async-only sequence"""

    def __init__(self, message: str = "this enumerable is async; use `async for` or .to.list_async()"):
        super().__init__(message)


class DuplicateKeyWarning(UserWarning):
    """non-fatal diagnostic for a repeated key while building a dict"""
    pass


def canonical_key(item: Any) -> Hashable:
    """
    canonical, deterministic key for an element.
    primitives are keyed as (type, value), so True, 1 and 1.0 stay distinct even
    though they compare equal. everything else is encoded as compact json
    with sorted mapping keys, so {'a': 1, 'b': 2} and {'b': 2, 'a': 1} share a key
    and tuples encode the same as lists.
    cyclic structures raise ValueError and non-serializable ones raise TypeError;
    pass an explicit key selector for those.
    """
    if isinstance(item, _PRIMITIVES):
        return (type(item), item)
    return json.dumps(item, sort_keys=True, separators=(',', ':'))


def element_key(item: Any) -> Hashable:
    """equality key for set-like operators: the element itself when hashable."""
    try:
        hash(item)
    except TypeError:
        return canonical_key(item)
    return item
