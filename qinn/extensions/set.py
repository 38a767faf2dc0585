from __future__ import annotations
import typing
import logging
from itertools import chain
from ..types import *
from ..adapters import aiterate

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


def _keyed(key_selector: Optional[KeySelector[T, K]]) -> Callable[[T], Hashable]:
    """equality key for an element; unhashable keys fall back to their canonical encoding"""
    if key_selector is None:
        return element_key
    return lambda item: element_key(key_selector(item))


class SetAccessor(Generic[T]):
    """
    set-like operations over a sequence.
    all of them are lazy and order-preserving. distinct, distinct_by and union remember
    every key seen so far, so memory grows with the number of distinct keys.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def distinct(self) -> 'Enumerable[T]':
        """return distinct elements. preserves order of first appearance."""
        return self._distinct(element_key)

    def distinct_by(self, key_selector: KeySelector[T, K]) -> 'Enumerable[T]':
        """return elements with distinct keys. the first element for each key wins."""
        return self._distinct(_keyed(key_selector))

    def _distinct(self, key_of: Callable[[T], Hashable]) -> 'Enumerable[T]':
        def distinct_data():
            seen = set()
            for item in self._enumerable:
                key = key_of(item)
                if key not in seen:
                    seen.add(key)
                    yield item
        async def distinct_data_async():
            seen = set()
            async for item in self._enumerable:
                key = key_of(item)
                if key not in seen:
                    seen.add(key)
                    yield item
        return self._enumerable._derive(distinct_data, distinct_data_async)

    def union(self, other: Union[Iterable[T], AsyncIterable[T]],
              key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """return the order-preserving union of two sequences (distinct elements)."""
        key_of = _keyed(key_selector)
        def union_data():
            seen = set()
            for item in chain(self._enumerable, other):
                key = key_of(item)
                if key not in seen:
                    seen.add(key)
                    yield item
        async def union_data_async():
            seen = set()
            for source in (self._enumerable, other):
                async for item in aiterate(source):
                    key = key_of(item)
                    if key not in seen:
                        seen.add(key)
                        yield item
        return self._enumerable._derive(union_data, union_data_async, other)

    def intersect(self, other: Union[Iterable[T], AsyncIterable[T]],
                  key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """
        return the elements of this sequence whose key also occurs in other.
        other is materialized into a key set before the first element is yielded;
        this sequence is streamed in its own order and its duplicates are kept.
        """
        return self._filter_by_membership(other, key_selector, keep=True)

    def except_(self, other: Union[Iterable[T], AsyncIterable[T]],
                key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """return elements from the first sequence whose key is not in the second (set difference)."""
        return self._filter_by_membership(other, key_selector, keep=False)

    def _filter_by_membership(self, other, key_selector, keep: bool) -> 'Enumerable[T]':
        key_of = _keyed(key_selector)
        def membership_data():
            other_keys = {key_of(x) for x in other}
            logger.debug("materialized %d key(s) from other sequence", len(other_keys))
            for item in self._enumerable:
                if (key_of(item) in other_keys) == keep:
                    yield item
        async def membership_data_async():
            other_keys = {key_of(x) async for x in aiterate(other)}
            logger.debug("materialized %d key(s) from other sequence", len(other_keys))
            async for item in self._enumerable:
                if (key_of(item) in other_keys) == keep:
                    yield item
        return self._enumerable._derive(membership_data, membership_data_async, other)

    def concat(self, other: Union[Iterable[T], AsyncIterable[T]]) -> 'Enumerable[T]':
        """concatenate with another sequence, preserving all elements and order."""
        async def concat_data_async():
            for source in (self._enumerable, other):
                async for item in aiterate(source):
                    yield item
        # chain does not touch other until this sequence is exhausted
        return self._enumerable._derive(lambda: chain(self._enumerable, other), concat_data_async, other)
