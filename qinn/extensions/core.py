from __future__ import annotations
import typing
from itertools import chain, islice, takewhile, dropwhile
from ..types import *
from ..adapters import materialize_async

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, OrderedEnumerable

class _CoreOperations(Generic[T]):
    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        def filter_data():
            return (x for x in self if predicate(x))
        async def filter_data_async():
            async for x in self:
                if predicate(x): yield x
        return self._derive(filter_data, filter_data_async)

    def select(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form"""
        def map_data():
            return (selector(x) for x in self)
        async def map_data_async():
            async for x in self:
                yield selector(x)
        return self._derive(map_data, map_data_async)

    def select_many(self: 'Enumerable[T]', selector: Selector[T, Iterable[U]]) -> 'Enumerable[U]':
        """project and flatten sequences"""
        def flat_map_data():
            return (item for sublist in self for item in selector(sublist))
        async def flat_map_data_async():
            async for sublist in self:
                for item in selector(sublist):
                    yield item
        return self._derive(flat_map_data, flat_map_data_async)

    def order_by(self: 'Enumerable[T]', key_selector: Callable[[T], K]) -> 'OrderedEnumerable[T]':
        """sort elements by a key"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(self, [(key_selector, False)])

    def order_by_descending(self: 'Enumerable[T]', key_selector: Callable[[T], K]) -> 'OrderedEnumerable[T]':
        """sort elements by a key in descending order"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(self, [(key_selector, True)])

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements"""
        def take_data():
            # islice stops pulling the upstream once count is reached
            return islice(self, count) if count > 0 else iter(())
        async def take_data_async():
            if count <= 0: return
            taken = 0
            async for x in self:
                yield x
                taken += 1
                if taken >= count: return
        return self._derive(take_data, take_data_async)

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        def skip_data():
            return islice(self, max(count, 0), None)
        async def skip_data_async():
            skipped = 0
            async for x in self:
                if skipped < count:
                    skipped += 1
                    continue
                yield x
        return self._derive(skip_data, skip_data_async)

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true"""
        async def take_while_data_async():
            async for x in self:
                if not predicate(x): return
                yield x
        return self._derive(lambda: takewhile(predicate, self), take_while_data_async)

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true"""
        async def skip_while_data_async():
            skipping = True
            async for x in self:
                if skipping and predicate(x): continue
                skipping = False
                yield x
        return self._derive(lambda: dropwhile(predicate, self), skip_while_data_async)

    def reverse(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """inverts the order of the elements in a sequence"""
        # order is only known once the whole upstream has been materialized
        def reverse_data():
            yield from reversed(list(self))
        async def reverse_data_async():
            for x in reversed(await materialize_async(self)):
                yield x
        return self._derive(reverse_data, reverse_data_async)

    def append(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """appends a value to the end of the sequence"""
        async def append_data_async():
            async for x in self:
                yield x
            yield element
        return self._derive(lambda: chain(self, [element]), append_data_async)

    def prepend(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """adds a value to the beginning of the sequence"""
        async def prepend_data_async():
            yield element
            async for x in self:
                yield x
        return self._derive(lambda: chain([element], self), prepend_data_async)
