"""Punto de entrada del portal de horas."""

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication, QMessageBox

from .config import load_config
from .session import SessionGate, SessionStorage
from .store import create_store
from .widgets.window import PortalWindow


def main() -> None:
    """Inicia la aplicación Qt."""

    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Registro de horas")
    app.setOrganizationName("BritLab")

    gate = SessionGate(storage=SessionStorage(config.session_file))
    gate.restore()

    try:
        store = create_store(config)
    except (OSError, ValueError) as exc:  # pragma: no cover - UI feedback
        QMessageBox.critical(None, "Configuración", f"Tabla de campos inválida: {exc}")
        sys.exit(1)

    window = PortalWindow(store, gate, refresh_delay_seconds=config.refresh_delay_seconds)
    window.show()

    sys.exit(app.exec())


__all__ = ["main"]
