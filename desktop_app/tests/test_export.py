from __future__ import annotations

from openpyxl import load_workbook

from timesheet_portal.models import TimeLogRecord
from timesheet_portal.summary import summarize_month
from timesheet_portal.export import export_month_xlsx


def test_export_month_xlsx(tmp_path):
    records = [
        TimeLogRecord(
            id="a",
            date="2024-01-08",
            employee_name="Daiana",
            entry_time="08:00",
            exit_time="16:00",
            total_hours=8.0,
            day_type="Semana",
        ),
        TimeLogRecord(
            id="b",
            date="2024-01-06",
            employee_name="Carla",
            entry_time="10:00",
            exit_time="14:00",
            total_hours=4.0,
            day_type="Fin de Semana",
            observation="reemplazo",
        ),
    ]
    target = tmp_path / "out" / "horas-2024-01.xlsx"

    result = export_month_xlsx(summarize_month(records, "2024-01"), target)

    assert result == target
    wb = load_workbook(target)
    assert wb.sheetnames == ["Resumen", "Registros"]

    summary_rows = list(wb["Resumen"].iter_rows(values_only=True))
    assert summary_rows[1] == ("Carla", 0, 4, 0, 4)
    assert summary_rows[2] == ("Daiana", 8, 0, 0, 8)
    assert summary_rows[-1] == ("Total", 8, 4, 0, 12)

    entry_rows = list(wb["Registros"].iter_rows(values_only=True))
    assert entry_rows[1][:2] == ("08/01/2024", "Daiana")
    assert entry_rows[2][-1] == "reemplazo"
