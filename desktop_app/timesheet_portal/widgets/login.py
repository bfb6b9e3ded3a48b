"""Formulario de inicio de sesión."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (QFormLayout, QLabel, QLineEdit, QPushButton,
                               QVBoxLayout, QWidget)

from ..session import SessionGate


class LoginForm(QWidget):
    """Pide usuario y contraseña y avisa cuando la sesión queda abierta."""

    authenticated = Signal(object)

    def __init__(self, gate: SessionGate, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.gate = gate

        title = QLabel("Registro de horas para facturación - Microbiología")
        font = QFont()
        font.setPointSize(16)
        font.setBold(True)
        title.setFont(font)
        title.setAlignment(Qt.AlignCenter)
        title.setWordWrap(True)

        subtitle = QLabel("BritLab - Sanatorio Británico")
        subtitle.setAlignment(Qt.AlignCenter)

        self.username_input = QLineEdit()
        self.username_input.setPlaceholderText("Nombre de usuario")
        self.password_input = QLineEdit()
        self.password_input.setPlaceholderText("********")
        self.password_input.setEchoMode(QLineEdit.Password)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #dc2626;")
        self.error_label.setVisible(False)

        self.login_button = QPushButton("Iniciar Sesión")
        self.login_button.setDefault(True)
        self.login_button.clicked.connect(self._handle_login)
        self.password_input.returnPressed.connect(self._handle_login)

        form = QFormLayout()
        form.addRow("Usuario", self.username_input)
        form.addRow("Contraseña", self.password_input)

        footer = QLabel("Uso exclusivo para personal autorizado")
        footer.setAlignment(Qt.AlignCenter)
        footer.setStyleSheet("color: #94a3b8;")

        layout = QVBoxLayout(self)
        layout.addStretch(1)
        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addSpacing(16)
        layout.addLayout(form)
        layout.addWidget(self.error_label)
        layout.addWidget(self.login_button)
        layout.addWidget(footer)
        layout.addStretch(1)

    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.username_input.clear()
        self.password_input.clear()
        self.error_label.setVisible(False)

    def _handle_login(self) -> None:
        result = self.gate.login(self.username_input.text(), self.password_input.text())
        if not result.ok:
            self.error_label.setText(f"⚠️ {result.error}")
            self.error_label.setVisible(True)
            return
        self.reset()
        self.authenticated.emit(result.user)


__all__ = ["LoginForm"]
