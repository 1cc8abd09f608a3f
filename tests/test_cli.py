"""Tests for CLI entrypoints."""

from __future__ import annotations

import json
from itertools import count
from pathlib import Path

import pytest

from vida_numeros import cli
from vida_numeros import shell as shell_module
from vida_numeros.storage import AppConfig, SQLiteConfigStore


@pytest.fixture(autouse=True)
def _fixed_ids(monkeypatch: pytest.MonkeyPatch) -> None:
    counter = count(1_735_689_600_000)
    monkeypatch.setattr(shell_module, "new_entry_id", lambda: next(counter))


def _stored(data_dir: Path) -> list[dict[str, float]]:
    return json.loads((data_dir / "registros.json").read_text(encoding="utf-8"))


def test_parse_args_custom_values() -> None:
    ns = cli.parse_args(["--data-dir", "/tmp/base", "edit", "5", "1"])
    assert ns.data_dir == "/tmp/base"
    assert ns.command == "edit"
    assert ns.id == 5
    assert ns.dieta == "1"
    assert ns.academia is None


def test_add_edit_delete_flow(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    base = ["--data-dir", str(tmp_path)]
    assert cli.main([*base, "add", "1", "2,5", ""]) == 0
    entry_id = _stored(tmp_path)[0]["id"]
    assert _stored(tmp_path)[0] == {
        "id": entry_id,
        "dieta": 1.0,
        "academia": 2.5,
        "nutricionista": 0.0,
    }

    # Only academia changes; the other fields keep the stored values.
    assert cli.main([*base, "edit", str(entry_id), "1", "3"]) == 0
    assert _stored(tmp_path)[0]["academia"] == 3.0
    assert _stored(tmp_path)[0]["dieta"] == 1.0
    assert _stored(tmp_path)[0]["id"] == entry_id

    assert cli.main([*base, "list"]) == 0
    out = capsys.readouterr().out
    assert f"{entry_id}\t" in out
    assert "academia=3" in out

    assert cli.main([*base, "delete", str(entry_id)]) == 0
    assert _stored(tmp_path) == []


def test_edit_unknown_id(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--data-dir", str(tmp_path), "edit", "42", "1"]) == 2
    assert "42" in capsys.readouterr().err


def test_export_empty_is_informational(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out_dir = tmp_path / "out"
    code = cli.main(["--data-dir", str(tmp_path), "export", "--out-dir", str(out_dir)])
    assert code == 0
    assert "Nenhum dado para exportar." in capsys.readouterr().out
    assert not out_dir.exists()


def test_export_writes_json_and_excel(tmp_path: Path) -> None:
    SQLiteConfigStore(tmp_path / "config.sqlite3").save_config(
        AppConfig(delivery="directory")
    )
    base = ["--data-dir", str(tmp_path)]
    out_dir = tmp_path / "out"
    cli.main([*base, "add", "1", "2", "3"])

    assert cli.main([*base, "export", "--out-dir", str(out_dir), "--excel"]) == 0

    exported = json.loads((out_dir / "dados.json").read_text(encoding="utf-8"))
    assert exported == _stored(tmp_path)
    assert (out_dir / "dados.xlsx").exists()


def test_export_unavailable_returns_error(tmp_path: Path) -> None:
    SQLiteConfigStore(tmp_path / "config.sqlite3").save_config(
        AppConfig(delivery="none")
    )
    base = ["--data-dir", str(tmp_path)]
    cli.main([*base, "add", "1"])
    assert cli.main([*base, "export"]) == 1
