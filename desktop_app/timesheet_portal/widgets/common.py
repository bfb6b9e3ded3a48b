"""Piezas compartidas por los portales."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QTableWidgetItem, QWidget

BANNER_STYLES = {
    "success": "background: #f0fdf4; color: #15803d; border: 1px solid #bbf7d0;",
    "warning": "background: #fffbeb; color: #b45309; border: 1px solid #fde68a;",
    "error": "background: #fef2f2; color: #b91c1c; border: 1px solid #fecaca;",
}

DAY_TYPE_COLORS = {
    "Semana": "#3b82f6",
    "Fin de Semana": "#f59e0b",
    "Feriado": "#ef4444",
}

NOT_CONFIGURED_MESSAGE = "Configuración pendiente: falta la URL del proxy de la planilla."


class MessageBanner(QLabel):
    """Mensaje de estado (éxito, advertencia o error)."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWordWrap(True)
        self.setVisible(False)

    def show_message(self, kind: str, text: str) -> None:
        self.setStyleSheet(BANNER_STYLES.get(kind, BANNER_STYLES["error"]) + " padding: 8px;")
        self.setText(text)
        self.setVisible(True)

    def clear_message(self) -> None:
        self.setText("")
        self.setVisible(False)


def readonly_item(text: str, *, data: Optional[str] = None) -> QTableWidgetItem:
    item = QTableWidgetItem(text)
    item.setFlags(Qt.ItemIsSelectable | Qt.ItemIsEnabled)
    if data is not None:
        item.setData(Qt.UserRole, data)
    return item


def format_hours(value: float) -> str:
    return f"{value:.2f}"


__all__ = [
    "DAY_TYPE_COLORS",
    "MessageBanner",
    "NOT_CONFIGURED_MESSAGE",
    "format_hours",
    "readonly_item",
]
