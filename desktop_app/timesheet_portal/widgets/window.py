"""Ventana principal: login o portal según la sesión."""

from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (QHBoxLayout, QLabel, QMainWindow, QPushButton,
                               QStackedWidget, QVBoxLayout, QWidget)

from ..models import User
from ..sequencing import RequestSequencer
from ..session import SessionGate
from ..store import RecordStore
from .admin import AdminDashboard
from .employee import EmployeePortal
from .login import LoginForm


class PortalWindow(QMainWindow):
    """Alterna entre el formulario de ingreso y el portal del usuario."""

    def __init__(self, store: RecordStore, gate: SessionGate, *, refresh_delay_seconds: float = 2.5,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store
        self.gate = gate
        self.refresh_delay_seconds = refresh_delay_seconds
        self.sequencer = RequestSequencer()
        self.portal: Optional[QWidget] = None
        self.setWindowTitle("Registro de horas - BritLab")
        self.resize(1100, 720)

        self.user_label = QLabel("")
        self.logout_button = QPushButton("Cerrar sesión")
        self.logout_button.clicked.connect(self.logout)

        header = QHBoxLayout()
        header.addWidget(self.user_label)
        header.addStretch(1)
        header.addWidget(self.logout_button)
        self.header_widget = QWidget()
        self.header_widget.setLayout(header)

        self.login_form = LoginForm(gate)
        self.login_form.authenticated.connect(self.show_portal)

        self.stack = QStackedWidget()
        self.stack.addWidget(self.login_form)

        central_widget = QWidget()
        layout = QVBoxLayout(central_widget)
        layout.addWidget(self.header_widget)
        layout.addWidget(self.stack, stretch=1)
        self.setCentralWidget(central_widget)

        user = self.gate.current_user
        if user is not None:
            self.show_portal(user)
        else:
            self.show_login()

    # ------------------------------------------------------------------
    def show_login(self) -> None:
        self.header_widget.setVisible(False)
        self.stack.setCurrentWidget(self.login_form)

    def show_portal(self, user: User) -> None:
        self._drop_portal()
        portal_cls = AdminDashboard if user.is_admin else EmployeePortal
        self.portal = portal_cls(
            self.store,
            user,
            sequencer=self.sequencer,
            refresh_delay_seconds=self.refresh_delay_seconds,
        )
        self.stack.addWidget(self.portal)
        self.stack.setCurrentWidget(self.portal)
        role_label = "Administrador" if user.is_admin else "Empleada"
        self.user_label.setText(f"{user.name} ({role_label})")
        self.header_widget.setVisible(True)
        self.portal.refresh()

    def logout(self) -> None:
        self.gate.logout()
        self._drop_portal()
        self.login_form.reset()
        self.show_login()

    def _drop_portal(self) -> None:
        if self.portal is None:
            return
        self.stack.removeWidget(self.portal)
        self.portal.deleteLater()
        self.portal = None


__all__ = ["PortalWindow"]
