"""Punto de entrada del constructor de moléculas Octeto.

Este módulo configura el registro, inicializa PyQt6, carga la ventana
principal y arranca el bucle de eventos.
"""

import logging
import os
import sys

# Aseguramos que Python encuentre los módulos dentro de `src` al ejecutar
# el archivo directamente.
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from PyQt6.QtWidgets import QApplication
from gui.main_window import OctetoWindow

LOG_LEVEL_ENV = "OCTETO_LOG_LEVEL"


def configure_logging() -> None:
    """Configura el registro raíz a partir de `OCTETO_LOG_LEVEL`."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    """
    Arranca la aplicación Qt y muestra la ventana principal.

    Returns:
        Código de salida del proceso de Qt.

    Side Effects:
        Configura el registro, crea la instancia de `QApplication`, muestra
        la ventana y entra en el bucle de eventos de Qt.
    """
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Octeto")

    window = OctetoWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
