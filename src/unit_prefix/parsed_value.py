"""Result record produced by ``MeasurementSystem.parse_value``."""

from __future__ import annotations

from dataclasses import dataclass

# Index is the exponent of the scale base.
UNIT_SYMBOLS = ("B", "K", "M", "G", "T", "P")

MAX_EXPONENT = len(UNIT_SYMBOLS) - 1


@dataclass(frozen=True)
class ParsedValue:
    """A magnitude expressed as a rounded count of a prefixed unit.

    Attributes:
        coefficient: Rounded-to-nearest count of ``unit``.
        unit: One of ``B``, ``K``, ``M``, ``G``, ``T``, ``P``.
        exponent: Power of the scale base that ``unit`` represents.
        scale: ``base ** exponent``, the divisor used for ``coefficient``.
    """

    coefficient: int
    unit: str
    exponent: int
    scale: int
