"""Numeric bases used to build unit prefixes."""

from __future__ import annotations

METRIC_SCALE_BASE = 1000
BINARY_SCALE_BASE = 1024

# Largest magnitude representable as an unsigned 64-bit count.
U64_MAX = 2**64 - 1
