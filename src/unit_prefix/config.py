"""TOML configuration loading and config file discovery."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from unit_prefix.measurement_system import MeasurementSystem, get_measurement_system
from unit_prefix.writers import SUPPORTED_FORMATS

CONFIG_FILENAME = "unit_prefix.toml"

DEFAULT_SYSTEM = "metric"
DEFAULT_FORMAT = "csv"


@dataclass(frozen=True)
class PrefixConfig:
    """Top-level configuration parsed from ``unit_prefix.toml``."""

    system: str = DEFAULT_SYSTEM
    output_format: str = DEFAULT_FORMAT

    @property
    def measurement_system(self) -> MeasurementSystem:
        """Measurement system instance named by ``system``."""
        return get_measurement_system(self.system)


def default_config() -> PrefixConfig:
    """Return the configuration used when no config file is present."""
    return PrefixConfig()


def _read_str(
    raw: dict[str, object], table: str, key: str, default: str, path: Path
) -> str:
    """Return ``raw[table][key]`` as a string, or *default* when absent.

    Raises:
        ValueError: If *table* is not a TOML table or *key* is not a string.
    """
    section = raw.get(table, {})
    if not isinstance(section, dict):
        raise ValueError(f"'{table}' in {path} must be a table")
    value = section.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"'{table}.{key}' in {path} must be a string")
    return value


def load_config(path: Path) -> PrefixConfig:
    """Read and parse a ``unit_prefix.toml`` file.

    Every table and key is optional; missing values fall back to
    ``metric`` and ``csv``.

    Args:
        path: Absolute or relative path to the TOML config file.

    Returns:
        Parsed ``PrefixConfig``.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is not valid TOML, a value has the wrong
            type, or the measurement system or output format is unknown.
    """
    with path.open("rb") as fh:
        raw = tomllib.load(fh)

    system = _read_str(raw, "measurement", "system", DEFAULT_SYSTEM, path)
    # Fail early on an unknown name rather than on first use.
    get_measurement_system(system)

    output_format = _read_str(raw, "output", "format", DEFAULT_FORMAT, path)
    if output_format not in SUPPORTED_FORMATS:
        msg = (
            f"Unsupported output format '{output_format}' in {path}, "
            f"expected one of {SUPPORTED_FORMATS}"
        )
        raise ValueError(msg)

    return PrefixConfig(system=system.lower(), output_format=output_format)


def discover_config(start: Path | None = None) -> Path:
    """Walk from *start* upward looking for ``unit_prefix.toml``.

    Args:
        start: Directory to begin the search.  Defaults to the current
            working directory.

    Returns:
        Absolute path to the discovered config file.

    Raises:
        FileNotFoundError: If no ``unit_prefix.toml`` is found between
            *start* and the filesystem root.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

        parent = current.parent
        if parent == current:
            break
        current = parent

    msg = f"{CONFIG_FILENAME} not found (searched from {start or Path.cwd()})"
    raise FileNotFoundError(msg)
