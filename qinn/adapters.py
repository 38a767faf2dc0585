from __future__ import annotations
import typing
from .types import *

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable


def capability_of(source: Any) -> Capability:
    """
    tag a source once, at construction time.
    enumerables carry their own tag; other objects are sync if they can be iterated
    synchronously and async if they only expose __aiter__.
    """
    tag = getattr(source, 'capability', None)
    if isinstance(tag, Capability):
        return tag
    if hasattr(source, '__iter__'):
        return Capability.SYNC
    if hasattr(source, '__aiter__'):
        return Capability.ASYNC
    raise TypeError(f"object of type {type(source).__name__} is not iterable")


def combined_capability(*sources: Any) -> Capability:
    """sync only when every source can be pulled synchronously"""
    if all(capability_of(s) is Capability.SYNC for s in sources):
        return Capability.SYNC
    return Capability.ASYNC


async def aiterate(source: Any) -> AsyncIterator[Any]:
    """pull any source asynchronously, draining sync sources one element at a time."""
    if hasattr(source, '__aiter__'):
        async for item in source:
            yield item
    else:
        for item in source:
            yield item


async def materialize_async(source: Any) -> List[Any]:
    """drain a source into a list, sequentially"""
    return [item async for item in aiterate(source)]
