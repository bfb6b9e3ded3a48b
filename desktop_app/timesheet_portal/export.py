"""Exportación XLSX del resumen mensual."""

from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook

from .summary import MonthlySummary, format_date_for_display


def export_month_xlsx(summary: MonthlySummary, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    ws = wb.active
    ws.title = "Resumen"
    ws.append(["Empleada", "Semana (h)", "Fin de Semana (h)", "Feriado (h)", "Total (h)"])
    for totals in sorted(summary.by_employee.values(), key=lambda item: item.name):
        ws.append([totals.name, totals.weekday, totals.weekend, totals.holiday, totals.total])
    ws.append(
        [
            "Total",
            summary.totals.weekday,
            summary.totals.weekend,
            summary.totals.holiday,
            summary.totals.total,
        ]
    )

    entries = wb.create_sheet("Registros")
    entries.append(["Fecha", "Empleada", "Ingreso", "Egreso", "Horas", "Tipo", "Observaciones"])
    for record in summary.entries:
        entries.append(
            [
                format_date_for_display(record.date),
                record.employee_name,
                record.entry_time,
                record.exit_time,
                record.total_hours,
                record.day_type,
                record.observation,
            ]
        )
    wb.save(path)
    return path


__all__ = ["export_month_xlsx"]
