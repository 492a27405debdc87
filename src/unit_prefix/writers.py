"""Tabulate parsed values and write them as CSV or Parquet."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import polars as pl

from unit_prefix.measurement_system import MeasurementSystem

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("csv", "parquet")

FRAME_SCHEMA = {
    "name": pl.String,
    "value": pl.UInt64,
    "coefficient": pl.UInt64,
    "unit": pl.String,
    "exponent": pl.UInt8,
    "scale": pl.UInt64,
}


def _ensure_parent(path: Path) -> None:
    """Create parent directories if they do not exist."""
    path.parent.mkdir(parents=True, exist_ok=True)


def build_frame(
    rows: Iterable[tuple[str, int]], system: MeasurementSystem
) -> pl.DataFrame:
    """Parse each ``(name, value)`` pair into one table row.

    Args:
        rows: Labelled magnitudes, in output order.
        system: Measurement system used to parse every value.

    Returns:
        A frame with columns ``name``, ``value``, ``coefficient``,
        ``unit``, ``exponent`` and ``scale``.
    """
    columns: dict[str, list[object]] = {key: [] for key in FRAME_SCHEMA}
    for name, value in rows:
        parsed = system.parse_value(value)
        columns["name"].append(name)
        columns["value"].append(value)
        columns["coefficient"].append(parsed.coefficient)
        columns["unit"].append(parsed.unit)
        columns["exponent"].append(parsed.exponent)
        columns["scale"].append(parsed.scale)
    return pl.DataFrame(columns, schema=FRAME_SCHEMA)


def write_frame(df: pl.DataFrame, dest: Path, fmt: str = "csv") -> None:
    """Write *df* to *dest* in the requested format.

    Args:
        df: Frame produced by ``build_frame``.
        dest: Target file path.  Parent directories are created.
        fmt: ``"csv"`` or ``"parquet"``.

    Raises:
        ValueError: If *fmt* is not supported.
        IsADirectoryError: If *dest* is an existing directory.
        OSError: If *dest* cannot be written.
    """
    if fmt not in SUPPORTED_FORMATS:
        msg = f"Unsupported format: {fmt!r} (expected one of {SUPPORTED_FORMATS})"
        raise ValueError(msg)
    if dest.is_dir():
        raise IsADirectoryError(f"Output path is a directory: {dest}")

    _ensure_parent(dest)
    if fmt == "csv":
        df.write_csv(dest)
    else:
        df.write_parquet(dest)
    logger.debug("Wrote %d rows to %s", df.height, dest)
