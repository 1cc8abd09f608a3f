"""Geração de planilha Excel formatada com os registros."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, Side

from vida_numeros.listing import entries_frame
from vida_numeros.model import Entry

EXCEL_FILE_NAME = "dados.xlsx"

_COLUMN_WIDTHS: dict[str, int] = {
    "Dia": 12,
    "Dieta": 10,
    "Academia": 10,
    "Nutricionista": 14,
}

_NUMBER_FORMATS: dict[str, str] = {
    "Dia": "dd/mm/yyyy",
    "Dieta": "0.##",
    "Academia": "0.##",
    "Nutricionista": "0.##",
}


@dataclass(frozen=True)
class ExcelLayout:
    """Layout/formatting configuration for the entries sheet."""

    sheet_name: str = "Registros"


def write_entries_xlsx(
    entries: Sequence[Entry],
    out_path: Path,
    layout: ExcelLayout,
    zone: tzinfo | None = None,
) -> None:
    """Write entries to a formatted Excel file.

    Args:
        entries: Entries in insertion order.
        out_path: Output path for the XLSX file.
        layout: Excel layout parameters.
        zone: Timezone used for the ``Dia`` column.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    export_df = entries_frame(entries, zone)
    if not export_df.empty:
        export_df["Dia"] = pd.to_datetime(export_df["Dia"])

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        export_df.to_excel(writer, index=False, sheet_name=layout.sheet_name)
        ws = writer.book[layout.sheet_name]
        _format_sheet(ws)


def _format_sheet(ws: Any) -> None:
    """Apply borders, widths and number formats to a worksheet."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center")
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = center
        cell.border = border

    col_index = {str(cell.value): idx for idx, cell in enumerate(ws[1])}
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            cell.alignment = center
            cell.border = border
        for header, fmt in _NUMBER_FORMATS.items():
            idx = col_index.get(header)
            if idx is not None:
                row[idx].number_format = fmt

    for header, width in _COLUMN_WIDTHS.items():
        idx = col_index.get(header)
        if idx is not None:
            letter = ws.cell(row=1, column=idx + 1).column_letter
            ws.column_dimensions[letter].width = width
