from __future__ import annotations
import typing
import logging
import warnings
import numpy as np
import pandas as pd
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)

class TerminalAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def list(self) -> List[T]:
        """convert to list"""
        return list(self._enumerable)

    async def list_async(self) -> List[T]:
        """drain asynchronously into a list, one element at a time"""
        return [item async for item in self._enumerable]

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.list())

    def set(self) -> Set[T]:
        """
        convert to set. elements must be hashable; a list or dict element raises
        TypeError. use .set.distinct() for structural dedup of such elements.
        """
        return set(self._enumerable)

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None,
             warn_on_duplicate: bool = False) -> Dict[K, V]:
        """convert to dictionary. the last value for a repeated key wins."""
        val_sel = value_selector if value_selector else lambda item: item
        result = {}
        for item in self._enumerable:
            key = key_selector(item)
            if warn_on_duplicate and key in result:
                message = f"duplicate key {key!r} found; using last occurrence"
                logger.warning(message)
                warnings.warn(message, DuplicateKeyWarning, stacklevel=2)
            result[key] = val_sel(item)
        return result

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self.list())

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self.list())

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        if predicate is None: return sum(1 for _ in self._enumerable)
        return sum(1 for x in self._enumerable if predicate(x))

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition"""
        if predicate is None:
            for _ in self._enumerable:
                return True
            return False
        return any(predicate(x) for x in self._enumerable)

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition. true for an empty sequence."""
        return all(predicate(x) for x in self._enumerable)

    def contains(self, value: T) -> bool:
        """check whether an element equal to value occurs"""
        return any(x == value for x in self._enumerable)

    def first(self, predicate: Optional[Predicate[T]] = None) -> Optional[T]:
        """get the first (matching) element, or None when there is none"""
        for item in self._enumerable:
            if predicate is None or predicate(item):
                return item
        return None
