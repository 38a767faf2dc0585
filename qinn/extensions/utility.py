from __future__ import annotations
import typing
import asyncio
import inspect
import logging
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


async def _invoke(func: AsyncSelector[T, U], item: T) -> U:
    """call func and await its result when it hands back an awaitable"""
    result = func(item)
    if inspect.isawaitable(result):
        result = await result
    return result


class UtilityAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def memoize(self, func: Selector[T, U],
                key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[U]':
        """
        returns a new enumerable that maps each element through func, caching the
        result per key. this operation is LAZY.

        the cache belongs to the returned enumerable and is shared by every traversal
        of it, so func runs exactly once per distinct key for the enumerable's lifetime.
        a repeated key still yields once per occurrence, served from the cache.
        keys default to canonical_key(element); pass key_selector for elements that
        cannot be json-encoded.
        """
        key_of = key_selector or canonical_key
        cache: Dict[Hashable, U] = {}

        def lookup(item: T) -> U:
            key = key_of(item)
            if key not in cache:
                logger.debug("memoize cache miss for key %r", key)
                cache[key] = func(item)
            return cache[key]

        def memoized_data():
            return (lookup(item) for item in self._enumerable)
        async def memoized_data_async():
            async for item in self._enumerable:
                yield lookup(item)
        return self._enumerable._derive(memoized_data, memoized_data_async)

    def memoize_async(self, func: AsyncSelector[T, U],
                      key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[U]':
        """
        async counterpart of memoize. func may be a coroutine function or a plain one.
        the result is always an async-only enumerable.

        on a cache miss the pending task is stored before anything is awaited, so a
        second pull for the same key that starts while the first is still running
        awaits that same task instead of calling func again. the task is awaited
        through asyncio.shield, so a consumer that is cancelled mid-await leaves the
        shared computation running. a failed computation stays cached and re-raises
        for every later pull of its key.
        """
        from ..enumerable import Enumerable
        key_of = key_selector or canonical_key
        cache: Dict[Hashable, asyncio.Task] = {}

        async def memoized_data_async():
            async for item in self._enumerable:
                key = key_of(item)
                task = cache.get(key)
                if task is None:
                    logger.debug("memoize_async cache miss for key %r", key)
                    task = asyncio.ensure_future(_invoke(func, item))
                    cache[key] = task
                yield await asyncio.shield(task)

        return Enumerable(aiter_func=memoized_data_async)

    def side_effect(self, action: Callable[[T], Any]) -> 'Enumerable[T]':
        """
        performs a side-effect action for each element as it passes through the sequence
        without modifying it. this operation is lazy and is primarily used for debugging
        pipelines without materializing the data.
        example: .where(...).util.side_effect(print).select(...)
        """
        def tap(item: T) -> T:
            action(item)
            return item

        def side_effect_data():
            return (tap(item) for item in self._enumerable)
        async def side_effect_data_async():
            async for item in self._enumerable:
                yield tap(item)
        return self._enumerable._derive(side_effect_data, side_effect_data_async)

    def pipe(self, func: Callable[..., U], *args, **kwargs) -> U:
        """
        pipes the enumerable object into an external function. enables custom, chainable operations.
        example: .util.pipe(summarize, title='my data')
        """
        return func(self._enumerable, *args, **kwargs)
