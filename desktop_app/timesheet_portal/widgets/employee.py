"""Portal de la empleada: carga de horas y registros propios."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from PySide6.QtCore import QTime, QTimer, Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (QCheckBox, QDateEdit, QFormLayout, QGroupBox,
                               QHBoxLayout, QLabel, QMessageBox, QPushButton,
                               QTableWidget, QTextEdit, QTimeEdit, QVBoxLayout,
                               QWidget)

from ..models import TimeLogRecord, User
from ..roster import OBSERVATION_PLACEHOLDER
from ..sequencing import RequestSequencer
from ..store import RecordStore, build_record
from ..summary import RECENT_LIMIT, format_date_for_display, sort_recent
from ..timecalc import classify_day, compute_hours
from .common import (DAY_TYPE_COLORS, NOT_CONFIGURED_MESSAGE, MessageBanner,
                     format_hours, readonly_item)
from .worker import submit

VIEW_KEY = "employee-entries"


class EmployeePortal(QWidget):
    """Formulario de registro y listado de los registros propios."""

    def __init__(self, store: RecordStore, user: User, *, sequencer: RequestSequencer,
                 refresh_delay_seconds: float = 2.5, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store
        self.user = user
        self.sequencer = sequencer
        self.refresh_delay_ms = int(refresh_delay_seconds * 1000)
        self.my_logs: List[TimeLogRecord] = []
        self.show_all = False
        self._pending_delete: Optional[str] = None

        self.banner = MessageBanner()

        self.date_edit = QDateEdit(self)
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDisplayFormat("dd/MM/yyyy")
        self.date_edit.setDate(date.today())
        self.entry_edit = QTimeEdit(QTime(8, 0))
        self.entry_edit.setDisplayFormat("HH:mm")
        self.exit_edit = QTimeEdit(QTime(16, 0))
        self.exit_edit.setDisplayFormat("HH:mm")
        self.holiday_check = QCheckBox("Feriado")
        self.observation_input = QTextEdit()
        self.observation_input.setPlaceholderText(OBSERVATION_PLACEHOLDER)
        self.observation_input.setFixedHeight(70)
        self.preview_label = QLabel("-")

        self.submit_button = QPushButton("Confirmar Registro")
        self.toggle_button = QPushButton("Mostrar Todos")
        self.refresh_button = QPushButton("Actualizar")
        self.delete_button = QPushButton("Borrar Registro")

        for signal in (self.date_edit.dateChanged, self.entry_edit.timeChanged,
                       self.exit_edit.timeChanged, self.holiday_check.toggled):
            signal.connect(self._update_preview)
        self.submit_button.clicked.connect(self._handle_submit)
        self.toggle_button.clicked.connect(self._toggle_show_all)
        self.refresh_button.clicked.connect(self.refresh)
        self.delete_button.clicked.connect(self._handle_delete)

        self.table = QTableWidget(0, 6)
        self.table.setHorizontalHeaderLabels(["Fecha", "Ingreso", "Egreso", "Horas", "Tipo", "Observaciones"])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setSelectionMode(QTableWidget.SingleSelection)

        layout = QVBoxLayout(self)
        layout.addWidget(self.banner)
        layout.addWidget(self._build_form_group())
        layout.addWidget(self._build_list_group(), stretch=1)

        self._update_preview()
        if not self.store.is_configured():
            self.banner.show_message("warning", NOT_CONFIGURED_MESSAGE)

    # ------------------------------------------------------------------
    def _build_form_group(self) -> QGroupBox:
        group = QGroupBox(f"Nuevo registro - {self.user.name}")
        form = QFormLayout(group)
        form.addRow("Fecha", self.date_edit)
        times = QHBoxLayout()
        times.addWidget(QLabel("Ingreso"))
        times.addWidget(self.entry_edit)
        times.addWidget(QLabel("Egreso"))
        times.addWidget(self.exit_edit)
        times.addStretch(1)
        times.addWidget(self.holiday_check)
        form.addRow(times)
        form.addRow("Resumen", self.preview_label)
        form.addRow("Observaciones", self.observation_input)
        form.addRow(self.submit_button)
        return group

    def _build_list_group(self) -> QGroupBox:
        group = QGroupBox("Mis registros")
        layout = QVBoxLayout(group)
        buttons = QHBoxLayout()
        buttons.addWidget(self.toggle_button)
        buttons.addWidget(self.refresh_button)
        buttons.addStretch(1)
        buttons.addWidget(self.delete_button)
        layout.addLayout(buttons)
        layout.addWidget(self.table)
        return group

    # ------------------------------------------------------------------
    def _form_values(self) -> tuple[str, str, str, bool]:
        day = self.date_edit.date().toString("yyyy-MM-dd")
        entry_time = self.entry_edit.time().toString("HH:mm")
        exit_time = self.exit_edit.time().toString("HH:mm")
        return day, entry_time, exit_time, self.holiday_check.isChecked()

    def _update_preview(self) -> None:
        day, entry_time, exit_time, holiday = self._form_values()
        hours = compute_hours(entry_time, exit_time)
        self.preview_label.setText(f"{format_hours(hours)} h · {classify_day(day, holiday)}")

    def _set_busy(self, busy: bool) -> None:
        self.submit_button.setEnabled(not busy)
        self.delete_button.setEnabled(not busy)
        self.submit_button.setText("Enviando..." if busy else "Confirmar Registro")

    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Vuelve a pedir los registros de la empleada."""

        ticket = self.sequencer.issue(VIEW_KEY)
        self.refresh_button.setEnabled(False)
        submit(ticket, self.store.list_for, self.user.name,
               on_finished=self._apply_logs, on_failed=self._handle_failure)

    def _apply_logs(self, ticket: int, logs: List[TimeLogRecord]) -> None:
        if not self.sequencer.is_current(VIEW_KEY, ticket):
            return
        self.refresh_button.setEnabled(True)
        self.my_logs = sort_recent(logs)
        self._populate_table()

    def _handle_failure(self, ticket: int, message: str) -> None:
        if ticket and not self.sequencer.is_current(VIEW_KEY, ticket):
            return
        self.refresh_button.setEnabled(True)
        self._set_busy(False)
        self.banner.show_message("error", message)

    def _populate_table(self) -> None:
        visible = self.my_logs if self.show_all else self.my_logs[:RECENT_LIMIT]
        self.table.setRowCount(len(visible))
        for row, log in enumerate(visible):
            self.table.setItem(row, 0, readonly_item(format_date_for_display(log.date), data=log.id))
            self.table.setItem(row, 1, readonly_item(log.entry_time))
            self.table.setItem(row, 2, readonly_item(log.exit_time))
            self.table.setItem(row, 3, readonly_item(format_hours(log.total_hours)))
            type_item = readonly_item(log.day_type)
            type_item.setForeground(QColor(DAY_TYPE_COLORS.get(log.day_type, "#334155")))
            self.table.setItem(row, 4, type_item)
            self.table.setItem(row, 5, readonly_item(log.observation))
        self.table.resizeColumnsToContents()

    def _toggle_show_all(self) -> None:
        self.show_all = not self.show_all
        self.toggle_button.setText("Mostrar Recientes" if self.show_all else "Mostrar Todos")
        self._populate_table()

    def _schedule_refresh(self) -> None:
        QTimer.singleShot(self.refresh_delay_ms, self.refresh)

    # ------------------------------------------------------------------
    def _handle_submit(self) -> None:
        if not self.store.is_configured():
            QMessageBox.warning(self, "Configuración", NOT_CONFIGURED_MESSAGE)
            return
        day, entry_time, exit_time, holiday = self._form_values()
        record = build_record(self.user, day, entry_time, exit_time, holiday,
                              self.observation_input.toPlainText())
        self.banner.clear_message()
        self._set_busy(True)
        submit(0, self.store.create, record,
               on_finished=self._handle_created, on_failed=self._handle_failure)

    def _handle_created(self, _ticket: int, ok: bool) -> None:
        self._set_busy(False)
        if not ok:
            self.banner.show_message("error", "Error al enviar datos. Verifique su conexión.")
            return
        self.banner.show_message("success", "¡Registro enviado! Actualizando lista...")
        self.observation_input.clear()
        self._schedule_refresh()

    def _selected_id(self) -> Optional[str]:
        row = self.table.currentRow()
        item = self.table.item(row, 0) if row >= 0 else None
        return item.data(Qt.UserRole) if item else None

    def _handle_delete(self) -> None:
        record_id = self._selected_id()
        if not record_id:
            QMessageBox.information(self, "Borrar", "Seleccione un registro.")
            return
        answer = QMessageBox.question(self, "Borrar", "¿Deseas borrar este registro?")
        if answer != QMessageBox.Yes:
            return
        self.banner.clear_message()
        self._set_busy(True)
        self._pending_delete = record_id
        submit(0, self.store.delete, record_id, self.user.name,
               on_finished=self._handle_deleted, on_failed=self._handle_failure)

    def _handle_deleted(self, _ticket: int, ok: bool) -> None:
        self._set_busy(False)
        record_id, self._pending_delete = self._pending_delete, None
        if not ok:
            self.banner.show_message("error", "No se pudo eliminar el registro.")
            return
        self.my_logs = [log for log in self.my_logs if log.id != record_id]
        self._populate_table()
        self.banner.show_message("success", "Registro eliminado exitosamente.")
        self._schedule_refresh()


__all__ = ["EmployeePortal"]
