"""Estado da aplicação e algoritmos de salvar, excluir e exportar."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Literal

from vida_numeros.delivery import (
    EXPORT_FILE_NAME,
    DeliveryUnavailableError,
    DocumentDelivery,
    DocumentMissingError,
)
from vida_numeros.excel_writer import EXCEL_FILE_NAME, ExcelLayout, write_entries_xlsx
from vida_numeros.model import Entry, new_entry_id, parse_metric
from vida_numeros.storage import JsonEntryStore, dumps

logger = logging.getLogger(__name__)

NOTHING_TO_EXPORT = "Nenhum dado para exportar."
SHARING_UNAVAILABLE = "Compartilhamento não disponível."


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a user action, ready to show in a status line."""

    ok: bool
    level: Literal["info", "error"] = "info"
    message: str = ""


@dataclass
class AppState:
    """Working list plus editing selection; mutated only by ``Shell``."""

    entries: list[Entry] = field(default_factory=list)
    editing_id: int | None = None
    loading: bool = False


class Shell:
    """Composition root: owns the state and talks to the store."""

    def __init__(self, store: JsonEntryStore, zone: tzinfo | None = None) -> None:
        self.store = store
        self.state = AppState()
        self._zone = zone

    @property
    def entries(self) -> list[Entry]:
        return list(self.state.entries)

    @property
    def is_editing(self) -> bool:
        return self.state.editing_id is not None

    @property
    def editing_entry(self) -> Entry | None:
        """Entry under edit, or None (also when it was deleted meanwhile)."""
        editing_id = self.state.editing_id
        if editing_id is None:
            return None
        return next((e for e in self.state.entries if e.id == editing_id), None)

    def start(self) -> None:
        self.state.loading = True
        try:
            self.state.entries = self.store.load_all()
        finally:
            self.state.loading = False
        logger.debug(
            "Loaded %d entries from %s", len(self.state.entries), self.store.path
        )

    def begin_edit(self, entry: Entry) -> None:
        self.state.editing_id = entry.id

    def cancel_edit(self) -> None:
        self.state.editing_id = None

    def save(self, dieta: str, academia: str, nutricionista: str) -> ActionResult:
        """Create a new entry or update the one under edit.

        Raw field text is coerced here; empty or invalid text becomes 0.
        """
        values = (
            parse_metric(dieta),
            parse_metric(academia),
            parse_metric(nutricionista),
        )
        editing_id = self.state.editing_id
        if editing_id is None:
            entry = Entry(self._fresh_id(), *values)
            updated = [*self.state.entries, entry]
            done = "Registro gravado."
        else:
            updated = [
                e.with_metrics(*values) if e.id == editing_id else e
                for e in self.state.entries
            ]
            done = "Registro atualizado."

        result = self._commit(updated, done)
        if result.ok:
            self.state.editing_id = None
        return result

    def delete(self, entry_id: int) -> ActionResult:
        """Remove the entry with ``entry_id``; the editing selection is kept."""
        updated = [e for e in self.state.entries if e.id != entry_id]
        return self._commit(updated, "Registro excluído.")

    def export(self, delivery: DocumentDelivery) -> ActionResult:
        """Hand the current dataset to ``delivery`` as ``dados.json``."""
        if not self.state.entries:
            return ActionResult(ok=False, level="info", message=NOTHING_TO_EXPORT)
        if not delivery.is_available():
            return ActionResult(ok=False, level="error", message=SHARING_UNAVAILABLE)
        try:
            location = delivery.deliver(EXPORT_FILE_NAME, dumps(self.state.entries))
        except DocumentMissingError:
            return ActionResult(ok=False, level="info", message=NOTHING_TO_EXPORT)
        except DeliveryUnavailableError:
            logger.warning("Export delivery unavailable", exc_info=True)
            return ActionResult(ok=False, level="error", message=SHARING_UNAVAILABLE)
        except OSError as exc:
            logger.exception("Export failed")
            return ActionResult(
                ok=False, level="error", message=f"Erro ao exportar: {exc}"
            )
        return ActionResult(ok=True, message=f"Exportado: {location}")

    def export_excel(self, out_dir: Path) -> ActionResult:
        """Write the dataset as ``dados.xlsx`` in ``out_dir``."""
        if not self.state.entries:
            return ActionResult(ok=False, level="info", message=NOTHING_TO_EXPORT)
        out_path = out_dir / EXCEL_FILE_NAME
        try:
            write_entries_xlsx(self.state.entries, out_path, ExcelLayout(), self._zone)
        except OSError as exc:
            logger.exception("Excel export failed")
            return ActionResult(
                ok=False, level="error", message=f"Erro ao exportar: {exc}"
            )
        return ActionResult(ok=True, message=f"Excel gerado: {out_path}")

    def _commit(self, updated: list[Entry], done: str) -> ActionResult:
        # Memory first, then the store; a failed write restores the old list.
        previous = self.state.entries
        self.state.entries = updated
        try:
            self.store.save_all(updated)
        except OSError as exc:
            logger.exception("Could not save %s", self.store.path)
            self.state.entries = previous
            return ActionResult(
                ok=False, level="error", message=f"Erro ao salvar: {exc}"
            )
        return ActionResult(ok=True, message=done)

    def _fresh_id(self) -> int:
        candidate = new_entry_id()
        ids = {e.id for e in self.state.entries}
        if candidate in ids:
            candidate = max(ids) + 1
        return candidate
