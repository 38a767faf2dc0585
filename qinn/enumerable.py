from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from .types import *
from .adapters import combined_capability, materialize_async

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.set import SetAccessor
from .extensions.stats import StatsAccessor
from .extensions.utility import UtilityAccessor
from .extensions.terminal import TerminalAccessor

logger = logging.getLogger(__name__)

# --- abstract base class ---

class IEnumerable(ABC, Generic[T]):
    @property
    @abstractmethod
    def capability(self) -> Capability:
        """which pull protocols this sequence supports"""
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[T]:
        pass

# --- base enumerable implementation ---

class _BaseEnumerable(IEnumerable[T]):
    def __init__(self, iter_func: Optional[IteratorFactory[T]] = None,
                 aiter_func: Optional[AsyncIteratorFactory[T]] = None):
        """
        init with a factory returning a fresh iterator (sync sequence) or a fresh
        async iterator (async-only sequence). nothing is pulled until iteration starts.
        """
        if (iter_func is None) == (aiter_func is None):
            raise ValueError("exactly one of iter_func or aiter_func must be given")
        self._iter_func = iter_func
        self._aiter_func = aiter_func
        self._capability = Capability.SYNC if iter_func is not None else Capability.ASYNC

    @property
    def capability(self) -> Capability:
        return self._capability

    def __iter__(self) -> Iterator[T]:
        if self._capability is Capability.ASYNC:
            raise ModeMismatchError()
        return self._iter_func()

    def __aiter__(self) -> AsyncIterator[T]:
        if self._aiter_func is not None:
            return self._aiter_func()
        return self._drain_sync()

    async def _drain_sync(self) -> AsyncIterator[T]:
        """async pull over a sync source: sequential, one element at a time"""
        for item in self._iter_func():
            yield item

    def _derive(self, iter_func: IteratorFactory[U], aiter_func: AsyncIteratorFactory[U],
                *others: Any) -> 'Enumerable[U]':
        """wrap a stage in a new enumerable carrying the capability of its sources"""
        if combined_capability(self, *others) is Capability.SYNC:
            return Enumerable(iter_func=iter_func)
        return Enumerable(aiter_func=aiter_func)

# --- private helpers for the ordering engine ---

def _compare_keys(left: Tuple, right: Tuple, desc_flags: List[bool]) -> int:
    """three-way compare of key tuples; keys neither < nor > each other count as equal"""
    for k1, k2, is_desc in zip(left, right, desc_flags):
        if k1 < k2: return 1 if is_desc else -1
        if k1 > k2: return -1 if is_desc else 1
    return 0


def _partition_sort(data: List[T], sort_keys: List[Tuple[Callable, bool]]) -> List[T]:
    """
    three-way partition sort, pivoting on the last element of each bucket.

    each bucket splits into strictly-before, equal-to and strictly-after the pivot key,
    and the output is before' + equal + after'. the equal bucket keeps input order,
    so ties come out in their original relative order (stable).

    average o(n log n) comparisons. the worst case is o(n^2), when pivots fail to split
    the bucket (already sorted input, for example). a work stack replaces recursion, so
    the o(n) worst-case depth never touches the interpreter's recursion limit.
    keys are computed once per element.
    """
    if len(data) <= 1:
        return list(data)

    desc_flags = [is_desc for _, is_desc in sort_keys]
    keyed = [(tuple(selector(item) for selector, _ in sort_keys), item) for item in data]

    result = []
    # (bucket, settled) pairs; settled buckets are equal-key runs emitted as they are
    work = [(keyed, False)]
    while work:
        bucket, settled = work.pop()
        if settled or len(bucket) <= 1:
            result.extend(item for _, item in bucket)
            continue

        pivot = bucket[-1][0]
        before, equal, after = [], [], []
        for entry in bucket:
            order = _compare_keys(entry[0], pivot, desc_flags)
            if order < 0:
                before.append(entry)
            elif order > 0:
                after.append(entry)
            else:
                equal.append(entry)

        # pushed in reverse so they pop as before, equal, after
        work.append((after, False))
        work.append((equal, True))
        work.append((before, False))

    return result

# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """a lazy, linq-inspired enumerable over sync and async iterables."""
    def __init__(self, iter_func: Optional[IteratorFactory[T]] = None,
                 aiter_func: Optional[AsyncIteratorFactory[T]] = None):
        super().__init__(iter_func, aiter_func)
        # --- initialize accessors ---
        self.set = SetAccessor(self)
        self.stats = StatsAccessor(self)
        self.util = UtilityAccessor(self)
        self.to = TerminalAccessor(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capability={self._capability.value})"

# --- ordered enumerable class ---

class OrderedEnumerable(Enumerable[T]):
    """represents a sorted sequence, allowing for subsequent orderings."""

    def __init__(self, source: Enumerable[T], sort_keys: List[Tuple[Callable, bool]]):
        self._source = source
        self._sort_keys = sort_keys
        if source.capability is Capability.SYNC:
            super().__init__(iter_func=self._sorted_data)
        else:
            super().__init__(aiter_func=self._sorted_data_async)

    def _sort(self, data: List[T]) -> List[T]:
        logger.debug("ordering %d materialized elements on %d key(s)", len(data), len(self._sort_keys))
        return _partition_sort(data, self._sort_keys)

    def _sorted_data(self) -> Iterator[T]:
        yield from self._sort(list(self._source))

    async def _sorted_data_async(self) -> AsyncIterator[T]:
        for item in self._sort(await materialize_async(self._source)):
            yield item

    def then_by(self, key_selector: KeySelector[T, K]) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        new_keys = self._sort_keys + [(key_selector, False)]
        return OrderedEnumerable(self._source, new_keys)

    def then_by_descending(self, key_selector: KeySelector[T, K]) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        new_keys = self._sort_keys + [(key_selector, True)]
        return OrderedEnumerable(self._source, new_keys)
