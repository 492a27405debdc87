"""Tests for ``unit_prefix.measurement_system``."""

from __future__ import annotations

import pytest

from unit_prefix.measurement_system import (
    Binary,
    Decimal,
    MeasurementSystem,
    get_measurement_system,
    parse_values,
)
from unit_prefix.parsed_value import UNIT_SYMBOLS, ParsedValue
from unit_prefix.scale_base import BINARY_SCALE_BASE, METRIC_SCALE_BASE, U64_MAX

SYSTEMS = [Decimal(), Binary()]

# Values around every threshold of both bases.
SAMPLES = sorted(
    {0, 1, 7, U64_MAX}
    | {
        base**exp + delta
        for base in (METRIC_SCALE_BASE, BINARY_SCALE_BASE)
        for exp in range(1, 6)
        for delta in (-1, 0, 1, base**exp // 2)
    }
)


class TestScaleBase:
    """Tests for the scale-base constants and ``scale_base``."""

    def test_constants(self) -> None:
        """Metric base is 1000 and binary base is 1024."""
        assert METRIC_SCALE_BASE == 1000
        assert BINARY_SCALE_BASE == 1024

    def test_decimal_base(self) -> None:
        """``Decimal`` uses the metric base."""
        assert Decimal().scale_base() == METRIC_SCALE_BASE

    def test_binary_base(self) -> None:
        """``Binary`` uses the binary base."""
        assert Binary().scale_base() == BINARY_SCALE_BASE


class TestScale:
    """Tests for ``MeasurementSystem.scale``."""

    @pytest.mark.parametrize("system", SYSTEMS)
    def test_powers(self, system: MeasurementSystem) -> None:
        """``scale(e)`` equals ``base ** e`` for the prefix range."""
        for exponent in range(6):
            assert system.scale(exponent) == system.scale_base() ** exponent

    def test_exponent_six_fits(self) -> None:
        """Exponent 6 still fits 64 bits for both bases."""
        assert Decimal().scale(6) == 10**18
        assert Binary().scale(6) == 2**60

    @pytest.mark.parametrize("system", SYSTEMS)
    def test_overflow_raises(self, system: MeasurementSystem) -> None:
        """Scales beyond the 64-bit range raise ``OverflowError``."""
        with pytest.raises(OverflowError):
            system.scale(7)

    @pytest.mark.parametrize("exponent", [2.5, 2.0, True, "2"])
    def test_non_int_exponent_raises(self, exponent: object) -> None:
        """Exponents must be integers."""
        with pytest.raises(TypeError):
            Binary().scale(exponent)  # type: ignore[arg-type]

    def test_negative_exponent_raises(self) -> None:
        """Negative exponents are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            Decimal().scale(-1)


class TestParseValueDecimal:
    """Concrete scenarios for the ``Decimal`` system."""

    def test_zero(self) -> None:
        """Zero stays in bytes."""
        assert Decimal().parse_value(0) == ParsedValue(0, "B", 0, 1)

    def test_below_kilo(self) -> None:
        """999 is the largest value in bytes."""
        assert Decimal().parse_value(999) == ParsedValue(999, "B", 0, 1)

    def test_exact_kilo(self) -> None:
        """1000 is exactly one K."""
        assert Decimal().parse_value(1000) == ParsedValue(1, "K", 1, 1000)

    def test_half_rounds_up(self) -> None:
        """1500 rounds 1.5 K up to 2 K."""
        assert Decimal().parse_value(1500) == ParsedValue(2, "K", 1, 1000)

    def test_below_half_rounds_down(self) -> None:
        """1499 rounds down to 1 K."""
        assert Decimal().parse_value(1499) == ParsedValue(1, "K", 1, 1000)

    def test_rounding_does_not_promote_unit(self) -> None:
        """999_999 rounds to 1000 K rather than switching to M."""
        assert Decimal().parse_value(999_999) == ParsedValue(1000, "K", 1, 1000)

    def test_peta(self) -> None:
        """10**15 is exactly one P."""
        expected = ParsedValue(1, "P", 5, 10**15)
        assert Decimal().parse_value(10**15) == expected

    def test_peta_is_the_cap(self) -> None:
        """Values past 1000 P stay in P."""
        parsed = Decimal().parse_value(U64_MAX)
        assert parsed.unit == "P"
        assert parsed.exponent == 5
        assert parsed.coefficient == 18447


class TestParseValueBinary:
    """Concrete scenarios for the ``Binary`` system."""

    def test_below_kibi(self) -> None:
        """1023 stays in bytes."""
        assert Binary().parse_value(1023) == ParsedValue(1023, "B", 0, 1)

    def test_exact_kibi(self) -> None:
        """1024 is exactly one K."""
        assert Binary().parse_value(1024) == ParsedValue(1, "K", 1, 1024)

    def test_two_kibi(self) -> None:
        """2048 is two K."""
        assert Binary().parse_value(2048) == ParsedValue(2, "K", 1, 1024)

    def test_thousand_is_bytes(self) -> None:
        """1000 is below the binary threshold."""
        assert Binary().parse_value(1000) == ParsedValue(1000, "B", 0, 1)

    def test_gibi(self) -> None:
        """Four GiB resolve to G."""
        assert Binary().parse_value(4 * 1024**3) == ParsedValue(4, "G", 3, 1024**3)


class TestParseValueProperties:
    """Invariants that hold for every returned ``ParsedValue``."""

    @pytest.mark.parametrize("system", SYSTEMS)
    def test_invariants(self, system: MeasurementSystem) -> None:
        """Scale, exponent, unit and coefficient agree with the input."""
        base = system.scale_base()
        for value in SAMPLES:
            parsed = system.parse_value(value)

            assert parsed.scale == base**parsed.exponent
            assert parsed.unit == UNIT_SYMBOLS[parsed.exponent]
            assert parsed.coefficient == (value + parsed.scale // 2) // parsed.scale
            if parsed.exponent > 0:
                assert value >= parsed.scale
            if parsed.exponent < 5:
                assert value < base ** (parsed.exponent + 1)

    @pytest.mark.parametrize("system", SYSTEMS)
    def test_identity_below_base(self, system: MeasurementSystem) -> None:
        """Every value below the base is returned unchanged in bytes."""
        for value in (0, 1, system.scale_base() - 1):
            assert system.parse_value(value) == ParsedValue(value, "B", 0, 1)

    def test_result_is_immutable(self) -> None:
        """``ParsedValue`` cannot be modified."""
        parsed = Decimal().parse_value(1000)
        with pytest.raises(AttributeError):
            parsed.coefficient = 5  # type: ignore[misc]


class TestParseValueErrors:
    """Input validation for ``parse_value``."""

    def test_negative_raises(self) -> None:
        """Negative magnitudes are rejected."""
        with pytest.raises(ValueError, match="range"):
            Decimal().parse_value(-1)

    def test_too_large_raises(self) -> None:
        """Values beyond 64 bits are rejected."""
        with pytest.raises(ValueError, match="range"):
            Binary().parse_value(U64_MAX + 1)

    @pytest.mark.parametrize("value", [1.5, "1000", True, None])
    def test_non_int_raises(self, value: object) -> None:
        """Non-integer inputs raise ``TypeError``."""
        with pytest.raises(TypeError):
            Decimal().parse_value(value)  # type: ignore[arg-type]


class TestVariants:
    """Tests for variant identity and lookup."""

    def test_same_variant_equal(self) -> None:
        """Two default instances of a variant are interchangeable."""
        assert Decimal() == Decimal()
        assert hash(Binary()) == hash(Binary())

    def test_different_variants_unequal(self) -> None:
        """``Decimal`` and ``Binary`` never compare equal."""
        assert Decimal() != Binary()

    def test_base_class_not_instantiable(self) -> None:
        """The abstract base has no scale base."""
        with pytest.raises(TypeError, match="SCALE_BASE"):
            MeasurementSystem()

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("metric", Decimal), ("decimal", Decimal), ("Binary", Binary)],
    )
    def test_lookup(self, name: str, expected: type) -> None:
        """Names map to their variant, case-insensitively."""
        assert isinstance(get_measurement_system(name), expected)

    def test_lookup_unknown(self) -> None:
        """Unknown names raise ``ValueError``."""
        with pytest.raises(ValueError, match="Unknown measurement system"):
            get_measurement_system("imperial")


class TestParseValues:
    """Tests for ``parse_values``."""

    def test_preserves_order(self) -> None:
        """Results follow input order."""
        result = parse_values([2048, 0, 1024**2], Binary())
        assert [p.unit for p in result] == ["K", "B", "M"]
        assert [p.coefficient for p in result] == [2, 0, 1]

    def test_empty(self) -> None:
        """An empty input gives an empty list."""
        assert parse_values([], Decimal()) == []
