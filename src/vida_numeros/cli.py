"""CLI para registrar, editar, excluir e exportar os registros diários."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from vida_numeros.delivery import select_delivery
from vida_numeros.form import EntryForm
from vida_numeros.model import METRIC_FIELDS
from vida_numeros.shell import ActionResult, Shell
from vida_numeros.storage import (
    CONFIG_FILE_NAME,
    DATA_FILE_NAME,
    AppConfig,
    JsonEntryStore,
    SQLiteConfigStore,
    default_data_dir,
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Minha Vida em Números: dieta, academia e nutricionista."
    )
    parser.add_argument(
        "--data-dir",
        default=str(default_data_dir()),
        help="Pasta dos dados (default: ./vida_numeros_dados).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log detalhado.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Lista os registros.")

    add = sub.add_parser("add", help="Grava um novo registro.")
    _add_metric_args(add)

    edit = sub.add_parser("edit", help="Atualiza um registro existente.")
    edit.add_argument("id", type=int)
    _add_metric_args(edit)

    delete = sub.add_parser("delete", help="Exclui um registro.")
    delete.add_argument("id", type=int)

    export = sub.add_parser("export", help="Exporta dados.json.")
    export.add_argument("--out-dir", default=None, help="Pasta de destino.")
    export.add_argument(
        "--excel", action="store_true", help="Gera também dados.xlsx."
    )
    return parser.parse_args(argv)


def _add_metric_args(parser: argparse.ArgumentParser) -> None:
    # Texto livre: a conversão para número fica com o Shell.
    for name in METRIC_FIELDS:
        parser.add_argument(name, nargs="?", default=None)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface.

    Returns:
        Exit code (0 on success).
    """
    ns = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.WARNING)

    data_dir = Path(ns.data_dir).expanduser()
    store = JsonEntryStore(data_dir / DATA_FILE_NAME)
    shell = Shell(store)
    shell.start()

    if ns.command == "list":
        for entry in shell.entries:
            day = entry.created_at().strftime("%d/%m/%Y %H:%M")
            print(
                f"{entry.id}\t{day}\tdieta={entry.dieta:g}"
                f"\tacademia={entry.academia:g}"
                f"\tnutricionista={entry.nutricionista:g}"
            )
        return 0

    if ns.command in ("add", "edit"):
        results: list[ActionResult] = []
        form = EntryForm(
            on_save=lambda *values: results.append(shell.save(*values)),
            on_cancel=shell.cancel_edit,
        )
        if ns.command == "edit":
            target = next((e for e in shell.entries if e.id == ns.id), None)
            if target is None:
                print(f"Registro não encontrado: {ns.id}", file=sys.stderr)
                return 2
            shell.begin_edit(target)
            form.set_entry(shell.editing_entry)
        # Omitted values keep what the form already shows.
        for name in METRIC_FIELDS:
            value = getattr(ns, name)
            if value is not None:
                setattr(form, name, value)
        form.submit()
        return _report(results[0])

    if ns.command == "delete":
        return _report(shell.delete(ns.id))

    config = SQLiteConfigStore(data_dir / CONFIG_FILE_NAME).load_config()
    if ns.out_dir:
        config = AppConfig(export_dir=ns.out_dir, delivery=config.delivery)
    delivery = select_delivery(sys.platform, config, store)
    result = shell.export(delivery)
    code = _report(result)
    if result.ok and ns.excel:
        code = _report(shell.export_excel(config.resolved_export_dir()))
    return code


def _report(result: ActionResult) -> int:
    stream = sys.stderr if result.level == "error" else sys.stdout
    print(result.message, file=stream)
    return 0 if result.ok or result.level == "info" else 1
