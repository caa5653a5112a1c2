"""Diagnostics envelope helpers."""

from __future__ import annotations

import traceback
from datetime import UTC, datetime
from typing import Any


def build_envelope(
    *,
    event: str,
    component: str,
    operation: str,
    data: dict[str, Any],
) -> dict[str, Any]:
    """Build the canonical diagnostics envelope.

    Schema:
        {
          "event": "<string>",
          "component": "<string>",
          "operation": "<string>",
          "timestamp": "<iso8601 utc>",
          "data": { ... }
        }

    Timestamp is emitted in UTC with a trailing 'Z'.
    """
    ts = datetime.now(UTC).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    return {
        "event": event,
        "component": component,
        "operation": operation,
        "timestamp": ts,
        "data": data,
    }


def short_traceback(*, max_lines: int = 20) -> str:
    tb_lines = traceback.format_exc().strip().splitlines()
    if len(tb_lines) <= max_lines:
        return "\n".join(tb_lines)
    return "\n".join(tb_lines[-max_lines:])
