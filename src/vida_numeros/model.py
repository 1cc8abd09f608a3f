"""Modelo tipado de um registro diário e conversões numéricas."""

from __future__ import annotations

import math
import re
import time
from dataclasses import dataclass, replace
from datetime import datetime, tzinfo
from typing import Any

from dateutil import tz

METRIC_FIELDS: tuple[str, ...] = ("dieta", "academia", "nutricionista")

_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII
)

# Ids are millisecond timestamps; keep them inside the datetime range.
MAX_ENTRY_ID = 253_402_128_000_000


@dataclass(frozen=True)
class Entry:
    """One tracked day: three metric values plus identifier."""

    id: int
    dieta: float = 0.0
    academia: float = 0.0
    nutricionista: float = 0.0

    def with_metrics(
        self, dieta: float, academia: float, nutricionista: float
    ) -> Entry:
        """Return a copy with new values and the same id."""
        return replace(
            self, dieta=dieta, academia=academia, nutricionista=nutricionista
        )

    def created_at(self, zone: tzinfo | None = None) -> datetime:
        """Creation moment derived from the millisecond id."""
        return datetime.fromtimestamp(self.id / 1000, tz=zone or tz.tzlocal())

    def to_dict(self) -> dict[str, float | int]:
        return {
            "id": self.id,
            "dieta": self.dieta,
            "academia": self.academia,
            "nutricionista": self.nutricionista,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Entry:
        """Build an entry from a persisted object.

        Raises:
            ValueError: If ``id`` is missing or not numeric.
        """
        entry_id = _coerce_id(raw.get("id"))
        return cls(
            id=entry_id,
            **{name: _coerce_number(raw.get(name)) for name in METRIC_FIELDS},
        )


def new_entry_id() -> int:
    """Identifier for a new entry: creation time in milliseconds."""
    return time.time_ns() // 1_000_000


def parse_metric(text: object) -> float:
    """Coerce raw form text to a float, defaulting to 0.

    Accepts ``,`` or ``.`` as decimal separator and, like a lenient number
    parser, reads the longest numeric prefix (``"3kg"`` -> 3.0).
    """
    normalized = str(text).replace(",", ".", 1)
    match = _FLOAT_PREFIX.match(normalized)
    if match is None:
        return 0.0
    try:
        value = float(match.group(0))
    except ValueError:
        return 0.0
    if not math.isfinite(value) or value == 0:
        return 0.0
    return value


def format_metric(value: float) -> str:
    """Format a metric for display/editing without NaN or trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _coerce_id(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"Invalid entry id: {value!r}")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Invalid entry id: {value!r}")
        value = int(value)
    if not 0 <= value <= MAX_ENTRY_ID:
        raise ValueError(f"Entry id out of range: {value!r}")
    return value


def _coerce_number(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
        return number if math.isfinite(number) else 0.0
    return parse_metric(value) if isinstance(value, str) else 0.0
