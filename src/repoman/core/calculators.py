"""
Scalar mapping calculators.

Both calculators take a batch of ``(identifier, raw_value)`` pairs and map
every raw value onto an output scale relative to the rest of the batch:

    Unbounded:  output = BASE_UNIT * value / min(positive values)
    Bounded:    output = FLOOR + (value - lo) / (hi - lo) * (CEILING - FLOOR)

Neither keeps state between calls; min and max are recomputed from every
batch. Arithmetic runs on Fractions and outputs are floored to ints, so the
same batch always produces the same numbers.
"""

import math
from fractions import Fraction
from typing import Dict, Hashable, Iterable, List, Tuple, TypeVar, Union

from ..exceptions import EmptyBatchError, InvalidAttributeError

__all__ = [
    "BASE_UNIT",
    "BOUNDED_FLOOR",
    "BOUNDED_CEILING",
    "UnboundedCalculator",
    "BoundedCalculator",
]

K = TypeVar("K", bound=Hashable)
Number = Union[int, float, Fraction]

# Output of the smallest item in an unbounded batch (minimum circle radius)
BASE_UNIT = 10

# Output band of the bounded calculator (color intensity)
BOUNDED_FLOOR = 65
BOUNDED_CEILING = 100


def _materialize(items: Iterable[Tuple[K, Number]], calculator: str) -> List[Tuple[K, Fraction]]:
    batch: List[Tuple[K, Fraction]] = []
    for key, value in items:
        if value is None or not math.isfinite(value) or value < 0:
            raise InvalidAttributeError(
                "Raw values must be finite and non-negative",
                attribute="raw_value",
                value=value,
                path=str(key),
            )
        batch.append((key, Fraction(value)))
    if not batch:
        raise EmptyBatchError(calculator=calculator)
    return batch


class UnboundedCalculator:
    """
    Linear, open-ended scale anchored at the batch minimum.

    The minimum item maps to exactly BASE_UNIT; every other item scales
    linearly from there with no upper bound. A batch of one maps to
    BASE_UNIT. The minimum is taken over positive values only; zero values
    map to BASE_UNIT, as does every item of an all-zero batch.
    """

    def __init__(self, base_unit: int = BASE_UNIT):
        self.base_unit = base_unit

    def calculate(self, items: Iterable[Tuple[K, Number]]) -> Dict[K, int]:
        batch = _materialize(items, type(self).__name__)
        if len(batch) == 1:
            key, _ = batch[0]
            return {key: self.base_unit}

        positive = [value for _, value in batch if value > 0]
        if not positive:
            return {key: self.base_unit for key, _ in batch}

        minimum = min(positive)
        return {
            key: (self.base_unit * value) // minimum if value > 0 else self.base_unit
            for key, value in batch
        }


class BoundedCalculator:
    """
    Linear scale clamped into ``[floor, ceiling]``.

    The batch minimum maps to ``floor`` and the maximum to ``ceiling``. When
    every value is equal everything maps to ``ceiling``.
    """

    def __init__(self, floor: int = BOUNDED_FLOOR, ceiling: int = BOUNDED_CEILING):
        if floor > ceiling:
            raise ValueError(f"Invalid band: floor {floor} > ceiling {ceiling}")
        self.floor = floor
        self.ceiling = ceiling

    def calculate(self, items: Iterable[Tuple[K, Number]]) -> Dict[K, int]:
        batch = _materialize(items, type(self).__name__)
        lo = min(value for _, value in batch)
        hi = max(value for _, value in batch)

        if hi == lo:
            return {key: self.ceiling for key, _ in batch}

        span = self.ceiling - self.floor
        return {
            key: self.floor + ((value - lo) * span) // (hi - lo)
            for key, value in batch
        }
