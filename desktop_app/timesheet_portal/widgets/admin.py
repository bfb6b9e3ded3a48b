"""Panel del administrador: totales mensuales y listado completo."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QTimer, Qt
from PySide6.QtGui import QColor, QFont
from PySide6.QtWidgets import (QDateEdit, QFileDialog, QGridLayout, QGroupBox,
                               QHBoxLayout, QLabel, QMessageBox, QPushButton,
                               QSplitter, QTableWidget, QVBoxLayout, QWidget)

from ..export import export_month_xlsx
from ..models import DAY_HOLIDAY, DAY_WEEKDAY, DAY_WEEKEND, TimeLogRecord, User
from ..sequencing import RequestSequencer
from ..store import RecordStore
from ..summary import MonthlySummary, format_date_for_display, summarize_month
from .common import (DAY_TYPE_COLORS, NOT_CONFIGURED_MESSAGE, MessageBanner,
                     format_hours, readonly_item)
from .worker import submit

VIEW_KEY = "admin-entries"


class AdminDashboard(QWidget):
    """Resumen del mes por tipo de día y por empleada."""

    def __init__(self, store: RecordStore, user: User, *, sequencer: RequestSequencer,
                 refresh_delay_seconds: float = 2.5, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store
        self.user = user
        self.sequencer = sequencer
        self.refresh_delay_ms = int(refresh_delay_seconds * 1000)
        self.logs: List[TimeLogRecord] = []
        self.summary: Optional[MonthlySummary] = None
        self._pending_delete: Optional[str] = None

        self.banner = MessageBanner()

        self.month_edit = QDateEdit(self)
        self.month_edit.setDisplayFormat("MM/yyyy")
        self.month_edit.setDate(date.today())
        self.month_edit.dateChanged.connect(self._apply_month)

        self.refresh_button = QPushButton("Actualizar Datos")
        self.export_button = QPushButton("Exportar XLSX")
        self.delete_button = QPushButton("Borrar Registro")
        self.refresh_button.clicked.connect(self.refresh)
        self.export_button.clicked.connect(self._handle_export)
        self.delete_button.clicked.connect(self._handle_delete)

        self.total_labels = {key: self._card_label() for key in ("total", DAY_WEEKDAY, DAY_WEEKEND, DAY_HOLIDAY)}
        self.entries_label = QLabel("0 Entradas")

        self.employee_table = QTableWidget(0, 5)
        self.employee_table.setHorizontalHeaderLabels(["Empleada", "Semana", "Fin de Semana", "Feriado", "Total"])
        self.employee_table.verticalHeader().setVisible(False)
        self.employee_table.horizontalHeader().setStretchLastSection(True)

        self.entries_table = QTableWidget(0, 7)
        self.entries_table.setHorizontalHeaderLabels(
            ["Fecha", "Empleada", "Ingreso", "Egreso", "Horas", "Tipo", "Observaciones"]
        )
        self.entries_table.verticalHeader().setVisible(False)
        self.entries_table.horizontalHeader().setStretchLastSection(True)
        self.entries_table.setSelectionBehavior(QTableWidget.SelectRows)
        self.entries_table.setSelectionMode(QTableWidget.SingleSelection)

        header = QHBoxLayout()
        header.addWidget(QLabel("Mes:"))
        header.addWidget(self.month_edit)
        header.addStretch(1)
        header.addWidget(self.refresh_button)
        header.addWidget(self.export_button)

        splitter = QSplitter()
        splitter.setOrientation(Qt.Vertical)
        splitter.addWidget(self.employee_table)
        splitter.addWidget(self._build_entries_group())
        splitter.setStretchFactor(1, 1)

        layout = QVBoxLayout(self)
        layout.addWidget(self.banner)
        layout.addLayout(header)
        layout.addWidget(self._build_cards_group())
        layout.addWidget(splitter, stretch=1)

        if not self.store.is_configured():
            self.banner.show_message("warning", NOT_CONFIGURED_MESSAGE)

    # ------------------------------------------------------------------
    @staticmethod
    def _card_label() -> QLabel:
        label = QLabel("0.00 h")
        font = QFont()
        font.setPointSize(16)
        font.setBold(True)
        label.setFont(font)
        return label

    def _build_cards_group(self) -> QGroupBox:
        group = QGroupBox("Resumen del mes")
        grid = QGridLayout(group)
        titles = {"total": "Total", DAY_WEEKDAY: "Semana", DAY_WEEKEND: "Fin de Semana", DAY_HOLIDAY: "Feriado"}
        for column, (key, title) in enumerate(titles.items()):
            caption = QLabel(title)
            if key in DAY_TYPE_COLORS:
                caption.setStyleSheet(f"color: {DAY_TYPE_COLORS[key]};")
            grid.addWidget(caption, 0, column)
            grid.addWidget(self.total_labels[key], 1, column)
        return group

    def _build_entries_group(self) -> QGroupBox:
        group = QGroupBox("Detalle de registros")
        layout = QVBoxLayout(group)
        row = QHBoxLayout()
        row.addWidget(self.entries_label)
        row.addStretch(1)
        row.addWidget(self.delete_button)
        layout.addLayout(row)
        layout.addWidget(self.entries_table)
        return group

    def _selected_month(self) -> str:
        return self.month_edit.date().toString("yyyy-MM")

    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Vuelve a pedir todos los registros."""

        ticket = self.sequencer.issue(VIEW_KEY)
        self.refresh_button.setEnabled(False)
        submit(ticket, self.store.list_all, on_finished=self._apply_logs, on_failed=self._handle_failure)

    def _apply_logs(self, ticket: int, logs: List[TimeLogRecord]) -> None:
        if not self.sequencer.is_current(VIEW_KEY, ticket):
            return
        self.refresh_button.setEnabled(True)
        self.logs = list(logs)
        self._apply_month()

    def _handle_failure(self, ticket: int, message: str) -> None:
        if ticket and not self.sequencer.is_current(VIEW_KEY, ticket):
            return
        self.refresh_button.setEnabled(True)
        self.delete_button.setEnabled(True)
        self.banner.show_message("error", message)

    def _apply_month(self) -> None:
        self.summary = summarize_month(self.logs, self._selected_month())
        totals = self.summary.totals
        self.total_labels["total"].setText(f"{format_hours(totals.total)} h")
        self.total_labels[DAY_WEEKDAY].setText(f"{format_hours(totals.weekday)} h")
        self.total_labels[DAY_WEEKEND].setText(f"{format_hours(totals.weekend)} h")
        self.total_labels[DAY_HOLIDAY].setText(f"{format_hours(totals.holiday)} h")
        self.entries_label.setText(f"{len(self.summary.entries)} Entradas")
        self._populate_employee_table()
        self._populate_entries_table()

    def _populate_employee_table(self) -> None:
        rows = sorted(self.summary.by_employee.values(), key=lambda item: item.name)
        self.employee_table.setRowCount(len(rows))
        for row, totals in enumerate(rows):
            self.employee_table.setItem(row, 0, readonly_item(totals.name))
            self.employee_table.setItem(row, 1, readonly_item(format_hours(totals.weekday)))
            self.employee_table.setItem(row, 2, readonly_item(format_hours(totals.weekend)))
            self.employee_table.setItem(row, 3, readonly_item(format_hours(totals.holiday)))
            self.employee_table.setItem(row, 4, readonly_item(format_hours(totals.total)))
        self.employee_table.resizeColumnsToContents()

    def _populate_entries_table(self) -> None:
        entries = self.summary.entries
        self.entries_table.setRowCount(len(entries))
        for row, log in enumerate(entries):
            self.entries_table.setItem(row, 0, readonly_item(format_date_for_display(log.date), data=log.id))
            self.entries_table.setItem(row, 1, readonly_item(log.employee_name))
            self.entries_table.setItem(row, 2, readonly_item(log.entry_time))
            self.entries_table.setItem(row, 3, readonly_item(log.exit_time))
            self.entries_table.setItem(row, 4, readonly_item(format_hours(log.total_hours)))
            type_item = readonly_item(log.day_type)
            type_item.setForeground(QColor(DAY_TYPE_COLORS.get(log.day_type, "#334155")))
            self.entries_table.setItem(row, 5, type_item)
            self.entries_table.setItem(row, 6, readonly_item(log.observation))
        self.entries_table.resizeColumnsToContents()

    # ------------------------------------------------------------------
    def _handle_export(self) -> None:
        if self.summary is None:
            self._apply_month()
        default_name = f"horas_{self.summary.month}.xlsx"
        filename, _ = QFileDialog.getSaveFileName(self, "Exportar resumen", default_name, "Excel (*.xlsx)")
        if not filename:
            return
        try:
            path = export_month_xlsx(self.summary, Path(filename))
        except OSError as exc:
            QMessageBox.warning(self, "Exportación", f"No se pudo guardar el archivo: {exc}")
            return
        self.banner.show_message("success", f"Resumen exportado a {path}")

    def _handle_delete(self) -> None:
        row = self.entries_table.currentRow()
        item = self.entries_table.item(row, 0) if row >= 0 else None
        record_id = item.data(Qt.UserRole) if item else None
        if not record_id:
            QMessageBox.information(self, "Borrar", "Seleccione un registro.")
            return
        answer = QMessageBox.question(
            self, "Borrar", "¿Confirmas que deseas eliminar este registro permanentemente?"
        )
        if answer != QMessageBox.Yes:
            return
        self._pending_delete = record_id
        self.delete_button.setEnabled(False)
        submit(0, self.store.delete, record_id, self.user.name,
               on_finished=self._handle_deleted, on_failed=self._handle_failure)

    def _handle_deleted(self, _ticket: int, ok: bool) -> None:
        self.delete_button.setEnabled(True)
        record_id, self._pending_delete = self._pending_delete, None
        if not ok:
            QMessageBox.warning(self, "Borrar", "Error al intentar borrar el registro.")
            return
        self.logs = [log for log in self.logs if log.id != record_id]
        self._apply_month()
        QTimer.singleShot(self.refresh_delay_ms, self.refresh)


__all__ = ["AdminDashboard"]
