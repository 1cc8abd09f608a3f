"""Formulário de criação/edição de registros, independente da GUI."""

from __future__ import annotations

from collections.abc import Callable

from vida_numeros.model import Entry, format_metric

SaveHandler = Callable[[str, str, str], object]
CancelHandler = Callable[[], object]


class EntryForm:
    """Three numeric text fields with create and edit modes.

    The form keeps no durable state; ``submit`` and ``cancel`` only emit
    events to the owner.
    """

    def __init__(self, on_save: SaveHandler, on_cancel: CancelHandler) -> None:
        self._on_save = on_save
        self._on_cancel = on_cancel
        self._entry: Entry | None = None
        self.dieta = ""
        self.academia = ""
        self.nutricionista = ""

    @property
    def entry(self) -> Entry | None:
        return self._entry

    @property
    def is_editing(self) -> bool:
        return self._entry is not None

    @property
    def title(self) -> str:
        if self.is_editing:
            return "Editando Registro (Update)"
        return "Novo Registro (Create)"

    @property
    def submit_label(self) -> str:
        return "Atualizar Registro" if self.is_editing else "Gravar no Arquivo"

    @property
    def can_cancel(self) -> bool:
        return self.is_editing

    def set_entry(self, entry: Entry | None) -> None:
        """Switch to editing ``entry`` or back to create mode.

        Fields are only repopulated when the selection actually changes, so
        text typed during an edit survives a re-render.
        """
        if entry == self._entry:
            return
        self._entry = entry
        if entry is None:
            self.dieta = ""
            self.academia = ""
            self.nutricionista = ""
            return
        self.dieta = format_metric(entry.dieta)
        self.academia = format_metric(entry.academia)
        self.nutricionista = format_metric(entry.nutricionista)

    def values(self) -> tuple[str, str, str]:
        return self.dieta, self.academia, self.nutricionista

    def submit(self) -> None:
        self._on_save(self.dieta, self.academia, self.nutricionista)

    def cancel(self) -> None:
        if self.can_cancel:
            self._on_cancel()
