"""Human-readable byte sizes."""

from __future__ import annotations

import decimal
import math
import os
from enum import IntEnum
from pathlib import Path


class SpaceUnit(IntEnum):
    """Display units; the value is the power of 1024."""

    BYTE = 0
    KB = 1
    MB = 2
    GB = 3
    TB = 4
    PB = 5
    EB = 6
    ZB = 7
    YB = 8

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[SpaceUnit, str] = {
    SpaceUnit.BYTE: "Byte",
    SpaceUnit.KB: "KB",
    SpaceUnit.MB: "MB",
    SpaceUnit.GB: "GB",
    SpaceUnit.TB: "TB",
    SpaceUnit.PB: "PB",
    SpaceUnit.EB: "EB",
    SpaceUnit.ZB: "ZB",
    SpaceUnit.YB: "YB",
}


def auto_unit(num_bytes: float) -> SpaceUnit:
    """Pick the largest unit for which the scaled value is >= 1.

    Zero and magnitudes below one byte map to BYTE; anything past YB stays YB.
    """
    magnitude = abs(num_bytes)
    if magnitude < 1:
        return SpaceUnit.BYTE
    level = math.floor(math.log(magnitude) / math.log(1024))
    # log() rounding can land one level low right at a power of 1024.
    if level + 1 <= SpaceUnit.YB and magnitude >= 1024 ** (level + 1):
        level += 1
    elif level > 0 and magnitude < 1024**level:
        level -= 1
    return SpaceUnit(min(max(level, SpaceUnit.BYTE), SpaceUnit.YB))


def format_bytes(
    num_bytes: float,
    decimals: int = 2,
    unit: SpaceUnit = SpaceUnit.BYTE,
    auto: bool = True,
) -> str:
    """Format a byte count as a string like "1.50 MB".

    Args:
        num_bytes: Size in bytes
        decimals: Fractional digits in the output
        unit: Unit to use when `auto` is False
        auto: Select the unit from the magnitude of `num_bytes`

    Returns:
        Formatted string, value and unit label separated by a space

    Raises:
        ValueError: For negative `decimals` or a non-finite size
    """
    if decimals < 0:
        raise ValueError("decimals must be >= 0")
    if isinstance(num_bytes, float) and not math.isfinite(num_bytes):
        raise ValueError(f"num_bytes must be finite, got {num_bytes!r}")

    level = auto_unit(num_bytes) if auto else SpaceUnit(unit)
    try:
        value = num_bytes / 1024**level
    except OverflowError:
        # Integer too large for a float; scale it exactly.
        with decimal.localcontext() as ctx:
            ctx.prec = abs(num_bytes).bit_length() // 3 + decimals + 2
            value = decimal.Decimal(num_bytes) / 1024**level
    return f"{value:.{decimals}f} {level.label}"


def parse_unit(name: str) -> SpaceUnit:
    """Look up a unit by label or enum name, case-insensitively."""
    key = name.strip().upper()
    if key in {"B", "BYTES"}:
        key = "BYTE"
    try:
        return SpaceUnit[key]
    except KeyError:
        allowed = ", ".join(u.label for u in SpaceUnit)
        raise ValueError(f"Unknown unit {name!r}. Allowed values: {allowed}") from None


def directory_size(path: Path) -> int:
    """Total size in bytes of the regular files below `path`.

    A regular file yields its own size; a missing path yields 0.
    """
    if not path.exists():
        return 0
    if path.is_file():
        return int(path.stat().st_size)

    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for name in filenames:
            file_path = Path(dirpath) / name
            if file_path.is_file():
                total += int(file_path.stat().st_size)
    return total
