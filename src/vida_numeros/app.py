"""App Kivy: formulário, lista de registros e exportação."""

from __future__ import annotations

import logging
from pathlib import Path

from vida_numeros.delivery import select_delivery
from vida_numeros.form import EntryForm
from vida_numeros.listing import EntryList
from vida_numeros.model import Entry
from vida_numeros.shell import ActionResult, Shell
from vida_numeros.storage import (
    CONFIG_FILE_NAME,
    DATA_FILE_NAME,
    JsonEntryStore,
    SQLiteConfigStore,
)

logger = logging.getLogger(__name__)


def run_app() -> int:
    """Lança a app Kivy."""
    from kivy.app import App
    from kivy.clock import Clock
    from kivy.core.window import Window
    from kivy.uix.boxlayout import BoxLayout
    from kivy.uix.button import Button
    from kivy.uix.gridlayout import GridLayout
    from kivy.uix.label import Label
    from kivy.uix.scrollview import ScrollView
    from kivy.uix.textinput import TextInput
    from kivy.utils import platform

    class VidaNumerosApp(App):
        """Main Kivy app."""

        title = "Minha Vida em Números"

        def __init__(self, **kwargs: object) -> None:
            super().__init__(**kwargs)
            data_dir = Path(self.user_data_dir)
            self.store = JsonEntryStore(data_dir / DATA_FILE_NAME)
            self.config_store = SQLiteConfigStore(data_dir / CONFIG_FILE_NAME)
            self.app_config = self.config_store.load_config()
            self.shell = Shell(self.store)
            self.delivery = select_delivery(platform, self.app_config, self.store)
            self.form = EntryForm(on_save=self._on_save, on_cancel=self._on_cancel)
            self.entry_list = EntryList(
                on_edit=self._on_edit, on_delete=self._on_delete
            )
            self.inputs: dict[str, TextInput] = {}
            self.status: Label | None = None
            self.form_title: Label | None = None
            self.submit_btn: Button | None = None
            self.cancel_btn: Button | None = None
            self.rows_grid: GridLayout | None = None
            self.body: BoxLayout | None = None

        def build(self) -> BoxLayout:
            Window.bind(on_key_down=self._on_key_down)

            root = BoxLayout(orientation="vertical", spacing=8, padding=10)
            root.add_widget(
                Label(text="Minha Vida em Números", size_hint_y=None, height=40)
            )
            self.status = Label(text="Carregando...", size_hint_y=None, height=30)
            root.add_widget(self.status)

            self.body = BoxLayout(orientation="vertical", spacing=8, disabled=True)
            self.body.add_widget(self._build_form())
            self.body.add_widget(self._build_list())
            self.body.add_widget(self._build_export())
            root.add_widget(self.body)

            Clock.schedule_once(self._start, 0)
            return root

        def _build_form(self) -> BoxLayout:
            card = BoxLayout(
                orientation="vertical", spacing=6, size_hint_y=None, height=230
            )
            self.form_title = Label(text=self.form.title, size_hint_y=None, height=30)
            card.add_widget(self.form_title)
            placeholders = {
                "dieta": "dia de dieta",
                "academia": "Dia de academia",
                "nutricionista": "Dia de nutricionista",
            }
            for name, hint in placeholders.items():
                inp = TextInput(
                    hint_text=hint,
                    multiline=False,
                    input_filter=_numeric_filter,
                    size_hint_y=None,
                    height=36,
                )
                inp.bind(
                    text=lambda _w, value, key=name: setattr(self.form, key, value)
                )
                self.inputs[name] = inp
                card.add_widget(inp)

            buttons = BoxLayout(orientation="horizontal", size_hint_y=None, height=40)
            self.submit_btn = Button(text=self.form.submit_label)
            self.cancel_btn = Button(text="Cancelar Edição", disabled=True)
            self.submit_btn.bind(on_press=lambda *_args: self.form.submit())
            self.cancel_btn.bind(on_press=lambda *_args: self.form.cancel())
            buttons.add_widget(self.submit_btn)
            buttons.add_widget(self.cancel_btn)
            card.add_widget(buttons)
            return card

        def _build_list(self) -> ScrollView:
            self.rows_grid = GridLayout(cols=1, spacing=4, size_hint_y=None)
            self.rows_grid.bind(minimum_height=self.rows_grid.setter("height"))
            scroll = ScrollView()
            scroll.add_widget(self.rows_grid)
            return scroll

        def _build_export(self) -> BoxLayout:
            box = BoxLayout(orientation="horizontal", size_hint_y=None, height=40)
            json_btn = Button(text="Exportar arquivo dados.json")
            excel_btn = Button(text="Exportar Excel")
            json_btn.bind(
                on_press=lambda *_args: self._show(self.shell.export(self.delivery))
            )
            excel_btn.bind(
                on_press=lambda *_args: self._show(
                    self.shell.export_excel(self.app_config.resolved_export_dir())
                )
            )
            box.add_widget(json_btn)
            box.add_widget(excel_btn)
            return box

        def _start(self, _dt: float) -> None:
            self.shell.start()
            if self.body is not None:
                self.body.disabled = False
            if self.status is not None:
                self.status.text = f"{len(self.shell.entries)} registro(s)"
            self._render()

        def _on_save(self, dieta: str, academia: str, nutricionista: str) -> None:
            self._show(self.shell.save(dieta, academia, nutricionista))
            self._render()

        def _on_cancel(self) -> None:
            self.shell.cancel_edit()
            self._render()

        def _on_edit(self, entry: Entry) -> None:
            self.shell.begin_edit(entry)
            self._render()

        def _on_delete(self, entry_id: int) -> None:
            self._show(self.shell.delete(entry_id))
            self._render()

        def _render(self) -> None:
            self.form.set_entry(self.shell.editing_entry)
            for name, inp in self.inputs.items():
                inp.text = getattr(self.form, name)
            if self.form_title is not None:
                self.form_title.text = self.form.title
            if self.submit_btn is not None:
                self.submit_btn.text = self.form.submit_label
            if self.cancel_btn is not None:
                self.cancel_btn.disabled = not self.form.can_cancel

            self.entry_list.set_entries(self.shell.entries)
            if self.rows_grid is None:
                return
            self.rows_grid.clear_widgets()
            for row in self.entry_list.rows():
                line = BoxLayout(orientation="horizontal", size_hint_y=None, height=36)
                line.add_widget(Label(text=row.label, size_hint_x=0.6))
                edit_btn = Button(text="Editar", size_hint_x=0.2)
                delete_btn = Button(text="Excluir", size_hint_x=0.2)
                edit_btn.bind(
                    on_press=lambda *_a, eid=row.entry.id: self.entry_list.edit(eid)
                )
                delete_btn.bind(
                    on_press=lambda *_a, eid=row.entry.id: self.entry_list.delete(eid)
                )
                line.add_widget(edit_btn)
                line.add_widget(delete_btn)
                self.rows_grid.add_widget(line)

        def _show(self, result: ActionResult) -> None:
            if result.level == "error":
                logger.warning(result.message)
            if self.status is not None:
                prefix = "Erro: " if result.level == "error" else ""
                self.status.text = f"{prefix}{result.message}"

        def _on_key_down(
            self,
            _window: object,
            keycode: int,
            _scancode: int,
            _text: str,
            _modifiers: list[str],
        ) -> bool:
            # Esc: sair do fullscreen ou fechar a app.
            if keycode != 27:
                return False
            if Window.fullscreen:
                Window.fullscreen = False
            else:
                self.stop()
            return True

    VidaNumerosApp().run()
    return 0


def _numeric_filter(substring: str, _from_undo: bool) -> str:
    """Keep digits and decimal separators, like a numeric keyboard."""
    return "".join(ch for ch in substring if ch in "0123456789.,-")
