from __future__ import annotations
import typing
import math
import pandas as pd
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


def _to_number(value: Any) -> Union[int, float]:
    """
    best-effort numeric coercion. numeric strings parse, anything else becomes nan.
    no validation is done; a nan simply propagates into the aggregate.
    """
    if isinstance(value, (int, float)):
        return value
    if pd.api.types.is_scalar(value):
        return pd.to_numeric(value, errors='coerce')
    return math.nan


class StatsAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def _values(self, selector: Optional[Selector[T, Union[int, float]]]) -> Iterator[Union[int, float]]:
        """stream numeric values, coercing elements when no selector is given"""
        if selector: return (selector(x) for x in self._enumerable)
        return (_to_number(x) for x in self._enumerable)

    def sum(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> Union[int, float]:
        """calc sum. 0 for an empty sequence."""
        total = 0
        for value in self._values(selector):
            total += value
        return total

    def average(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> float:
        """calc average. 0 for an empty sequence."""
        total, count = 0, 0
        for value in self._values(selector):
            total += value
            count += 1
        return total / count if count else 0

    def min(self, selector: Optional[Selector[T, Any]] = None) -> Optional[T]:
        """find minimum element, or None for an empty sequence"""
        return min(self._enumerable, key=selector, default=None)

    def max(self, selector: Optional[Selector[T, Any]] = None) -> Optional[T]:
        """find maximum element, or None for an empty sequence"""
        return max(self._enumerable, key=selector, default=None)
