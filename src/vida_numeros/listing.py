"""Lista de registros com gatilhos de edição e exclusão."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import tzinfo

import pandas as pd

from vida_numeros.model import Entry, format_metric

EditHandler = Callable[[Entry], object]
DeleteHandler = Callable[[int], object]

PREVIEW_COLUMNS: tuple[str, ...] = ("Dia", "Dieta", "Academia", "Nutricionista")


@dataclass(frozen=True)
class EntryRow:
    """Display row for one entry."""

    entry: Entry
    label: str


class EntryList:
    """Renders entries in insertion order; no filtering or sorting."""

    def __init__(
        self,
        on_edit: EditHandler,
        on_delete: DeleteHandler,
        zone: tzinfo | None = None,
    ) -> None:
        self._on_edit = on_edit
        self._on_delete = on_delete
        self._zone = zone
        self._entries: list[Entry] = []

    def set_entries(self, entries: Sequence[Entry]) -> None:
        self._entries = list(entries)

    def rows(self) -> list[EntryRow]:
        return [EntryRow(entry, self._label(entry)) for entry in self._entries]

    def edit(self, entry_id: int) -> None:
        entry = self._find(entry_id)
        if entry is not None:
            self._on_edit(entry)

    def delete(self, entry_id: int) -> None:
        if self._find(entry_id) is not None:
            self._on_delete(entry_id)

    def preview_frame(self) -> pd.DataFrame:
        """Tabela pronta para exibir (texto alinhado, sem NaN)."""
        return entries_frame(self._entries, self._zone, formatted=True)

    def _find(self, entry_id: int) -> Entry | None:
        return next((e for e in self._entries if e.id == entry_id), None)

    def _label(self, entry: Entry) -> str:
        day = entry.created_at(self._zone).strftime("%d/%m/%Y")
        return (
            f"{day}  Dieta: {format_metric(entry.dieta)}"
            f"  Academia: {format_metric(entry.academia)}"
            f"  Nutricionista: {format_metric(entry.nutricionista)}"
        )


def entries_frame(
    entries: Sequence[Entry],
    zone: tzinfo | None = None,
    *,
    formatted: bool = False,
) -> pd.DataFrame:
    """Convert entries to a DataFrame with one row per entry.

    Args:
        entries: Entries in display order.
        zone: Timezone for the ``Dia`` column (local time by default).
        formatted: Render every cell as text for previews.

    Returns:
        DataFrame with columns ``Dia``, ``Dieta``, ``Academia``,
        ``Nutricionista``.
    """
    if not entries:
        return pd.DataFrame(columns=list(PREVIEW_COLUMNS))
    df = pd.DataFrame(
        {
            "Dia": [e.created_at(zone).date() for e in entries],
            "Dieta": [e.dieta for e in entries],
            "Academia": [e.academia for e in entries],
            "Nutricionista": [e.nutricionista for e in entries],
        }
    )
    if not formatted:
        return df
    out = df.copy()
    out["Dia"] = out["Dia"].map(lambda d: d.strftime("%d/%m/%Y"))
    for col in PREVIEW_COLUMNS[1:]:
        out[col] = out[col].map(format_metric)
    return out
