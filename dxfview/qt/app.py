# Qt Application Entry Point
#
# Usage:
#     python -m dxfview [drawing.dxf]
#   or, once installed:
#     dxfview [drawing.dxf]

import logging
import os
import sys

from PySide6.QtGui import QColor
from PySide6.QtWidgets import QApplication

from dxfview import utils_core as Utils

from . import canvas_widget
from .main_window import MainWindow


def setup_logging():
    """Configure root logging from [Logging] level."""
    level = Utils.getStr("Logging", "level", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main():
    """Create the QApplication and MainWindow, then run."""
    Utils.loadConfiguration()
    setup_logging()

    canvas_widget.COLORS["background"] = QColor(
        Utils.getStr("Viewer", "background", "#111111"))
    canvas_widget.COLORS["grid"] = QColor(
        Utils.getStr("Viewer", "grid.color", "#333333"))

    app = QApplication(sys.argv)
    app.setApplicationName(Utils.__prg__)
    app.setApplicationVersion(Utils.__version__)

    window = MainWindow()
    window.show()

    # Load file from command line if provided
    args = [a for a in sys.argv[1:] if not a.startswith("-")]
    if args and os.path.isfile(args[0]):
        app.processEvents()
        window.open_file(args[0])

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
