"""Measurement systems that pick a unit prefix for a raw count.

A measurement system is selected by type: ``Decimal`` scales by powers of
1000, ``Binary`` by powers of 1024.  Both share the prefix selection and
rounding logic of ``MeasurementSystem``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from unit_prefix.parsed_value import MAX_EXPONENT, UNIT_SYMBOLS, ParsedValue
from unit_prefix.scale_base import BINARY_SCALE_BASE, METRIC_SCALE_BASE, U64_MAX


def _rounded_div(dividend: int, divisor: int) -> int:
    """Integer division rounded to nearest, ties rounded up."""
    return (dividend + divisor // 2) // divisor


class MeasurementSystem:
    """Base for unit prefix systems.

    Subclasses bind ``SCALE_BASE`` and carry no per-instance state.
    """

    SCALE_BASE: int

    def __new__(cls) -> MeasurementSystem:
        if not hasattr(cls, "SCALE_BASE"):
            raise TypeError(f"{cls.__name__} does not define SCALE_BASE")
        return super().__new__(cls)

    def scale_base(self) -> int:
        """Return the multiplication factor of this system."""
        return self.SCALE_BASE

    def scale(self, exponent: int) -> int:
        """Return ``scale_base() ** exponent``.

        Args:
            exponent: Non-negative power of the scale base.

        Returns:
            The scale as an integer.

        Raises:
            TypeError: If *exponent* is not an ``int`` (``bool`` included).
            ValueError: If *exponent* is negative.
            OverflowError: If the result does not fit an unsigned 64-bit
                integer.
        """
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"Expected int exponent, got {type(exponent).__name__}")
        if exponent < 0:
            raise ValueError(f"Exponent must be non-negative, got {exponent}")
        result = self.scale_base() ** exponent
        if result > U64_MAX:
            msg = (
                f"{self.scale_base()}**{exponent} exceeds the unsigned "
                "64-bit range"
            )
            raise OverflowError(msg)
        return result

    def parse_value(self, value: int) -> ParsedValue:
        """Express *value* with the largest applicable unit prefix.

        Exponents are tried from ``P`` (5) down to ``K`` (1); the first
        scale not exceeding *value* wins.  Values below ``scale_base()``
        are returned unchanged in ``B``.

        Args:
            value: Magnitude between 0 and ``2**64 - 1``.

        Returns:
            The ``ParsedValue`` for *value*.

        Raises:
            TypeError: If *value* is not an ``int`` (``bool`` included).
            ValueError: If *value* is negative or exceeds the unsigned
                64-bit range.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"Value out of unsigned 64-bit range: {value}")

        for exponent in range(MAX_EXPONENT, 0, -1):
            scale = self.scale(exponent)
            if value >= scale:
                return ParsedValue(
                    coefficient=_rounded_div(value, scale),
                    unit=UNIT_SYMBOLS[exponent],
                    exponent=exponent,
                    scale=scale,
                )

        return ParsedValue(coefficient=value, unit="B", exponent=0, scale=1)


@dataclass(frozen=True)
class Decimal(MeasurementSystem):
    """Use the metric system (powers of 1000)."""

    SCALE_BASE = METRIC_SCALE_BASE


@dataclass(frozen=True)
class Binary(MeasurementSystem):
    """Use the binary system (powers of 1024)."""

    SCALE_BASE = BINARY_SCALE_BASE


_SYSTEMS_BY_NAME: dict[str, type[MeasurementSystem]] = {
    "metric": Decimal,
    "decimal": Decimal,
    "binary": Binary,
}

SYSTEM_NAMES = tuple(_SYSTEMS_BY_NAME)


def get_measurement_system(name: str) -> MeasurementSystem:
    """Return the measurement system registered under *name*.

    Args:
        name: ``metric``, ``decimal`` or ``binary`` (case-insensitive).

    Raises:
        ValueError: If *name* is not a known system.
    """
    try:
        system_cls = _SYSTEMS_BY_NAME[name.lower()]
    except KeyError:
        msg = (
            f"Unknown measurement system '{name}', "
            f"expected one of {SYSTEM_NAMES}"
        )
        raise ValueError(msg) from None
    return system_cls()


def parse_values(
    values: Iterable[int], system: MeasurementSystem
) -> list[ParsedValue]:
    """Parse every item of *values* with *system*, preserving order."""
    return [system.parse_value(value) for value in values]
