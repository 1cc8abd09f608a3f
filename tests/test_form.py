from __future__ import annotations

from vida_numeros.form import EntryForm
from vida_numeros.model import Entry


def _form() -> tuple[EntryForm, list[tuple[str, ...]]]:
    events: list[tuple[str, ...]] = []
    form = EntryForm(
        on_save=lambda *values: events.append(("save", *values)),
        on_cancel=lambda: events.append(("cancel",)),
    )
    return form, events


def test_new_form_is_empty_create_mode() -> None:
    form, _ = _form()
    assert form.values() == ("", "", "")
    assert not form.is_editing
    assert form.title == "Novo Registro (Create)"
    assert form.submit_label == "Gravar no Arquivo"
    assert not form.can_cancel


def test_submit_emits_raw_text() -> None:
    form, events = _form()
    form.dieta = "1"
    form.academia = "2,5"
    form.submit()
    assert events == [("save", "1", "2,5", "")]


def test_set_entry_populates_each_field_from_its_own_value() -> None:
    form, _ = _form()
    form.set_entry(Entry(1, dieta=1.0, academia=2.5, nutricionista=4.0))
    assert form.values() == ("1", "2.5", "4")
    assert form.title == "Editando Registro (Update)"
    assert form.submit_label == "Atualizar Registro"


def test_same_entry_does_not_clobber_typed_text() -> None:
    form, _ = _form()
    entry = Entry(1, 1.0, 2.0, 3.0)
    form.set_entry(entry)
    form.academia = "9"
    form.set_entry(entry)
    assert form.academia == "9"


def test_cancel_then_create_resets_fields() -> None:
    form, events = _form()
    form.set_entry(Entry(1, 5.0, 6.0, 7.0))
    form.cancel()
    form.set_entry(None)
    assert events == [("cancel",)]
    assert form.values() == ("", "", "")
    assert not form.can_cancel


def test_cancel_without_edit_emits_nothing() -> None:
    form, events = _form()
    form.cancel()
    assert events == []
