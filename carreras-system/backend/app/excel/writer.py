"""Executive-list workbook export.

Money columns are written as numbers in currency units (cents / 100) with
a two-decimal number format, so totals can be summed directly in Excel.
"""

from __future__ import annotations

import io
from decimal import Decimal

import openpyxl
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

SHEET_TITLE = "Carreras"
MONEY_FORMAT = "#,##0.00"
PCT_FORMAT = "0.0"
HEADER_FILL = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")

# (header, getter, kind); kind is "money", "pct" or None
COLUMNS = [
    ("Fecha", lambda c, k: c.fecha, None),
    ("Carrera", lambda c, k: c.nombre, None),
    ("Lugar", lambda c, k: c.lugar, None),
    ("Tipo", lambda c, k: c.tipo, None),
    ("Pedidos", lambda c, k: k.pedidos_totales, None),
    ("Ingresos ARS", lambda c, k: k.ingresos_ars, "money"),
    ("Ingresos USD", lambda c, k: k.ingresos_usd, "money"),
    ("Fotógrafos", lambda c, k: k.costo_fot, "money"),
    ("Mercado Pago", lambda c, k: k.costo_mp, "money"),
    ("Ingresos Brutos", lambda c, k: k.costo_ib, "money"),
    ("IVA", lambda c, k: k.costo_iva, "money"),
    ("Proveedor", lambda c, k: k.costo_prov, "money"),
    ("Deb/Cred", lambda c, k: k.costo_deb_cred, "money"),
    ("Comisiones ARS", lambda c, k: k.comision_ars, "money"),
    ("Gastos específicos", lambda c, k: k.costo_gastos_especificos, "money"),
    ("Gastos ARS", lambda c, k: k.gastos_totales_ars, "money"),
    ("Resultado ARS", lambda c, k: k.resultado_final_ars, "money"),
    ("Comisiones USD", lambda c, k: k.comision_usd, "money"),
    ("Resultado USD", lambda c, k: k.resultado_final_usd, "money"),
    ("MP %", lambda c, k: c.mp_pct, "pct"),
    ("IB %", lambda c, k: c.ib_pct, "pct"),
    ("IVA %", lambda c, k: c.iva_pct, "pct"),
    ("Prov %", lambda c, k: c.prov_pct, "pct"),
    ("Deb/Cred %", lambda c, k: c.deb_cred_pct, "pct"),
]


def _cents_to_units(cents: int) -> Decimal:
    return Decimal(cents) / 100


def build_carreras_workbook(rows) -> bytes:
    """Render ``(carrera, calculo)`` pairs as an .xlsx file and return its bytes."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    for col, (header, _, _) in enumerate(COLUMNS, start=1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL

    for row_idx, (carrera, calculo) in enumerate(rows, start=2):
        for col, (_, getter, kind) in enumerate(COLUMNS, start=1):
            value = getter(carrera, calculo)
            if kind == "money":
                value = _cents_to_units(value)
            cell = ws.cell(row=row_idx, column=col, value=value)
            if kind == "money":
                cell.number_format = MONEY_FORMAT
            elif kind == "pct":
                cell.number_format = PCT_FORMAT
            elif col == 1:
                cell.number_format = "yyyy-mm-dd"

    for col, (header, _, _) in enumerate(COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(col)].width = max(12, len(header) + 2)
    ws.freeze_panes = "C2"

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
