# Qt Main Window - drawing viewer
#
# Provides menu bar, toolbar, the layer dock, the central canvas and
# the status bar, and wires FileManager / ViewSession events onto the
# AppSignals hub.

import base64
import logging
import os

from PySide6.QtCore import Qt, QByteArray
from PySide6.QtGui import QAction, QActionGroup, QKeySequence
from PySide6.QtWidgets import (
    QDockWidget, QFileDialog, QLabel, QMainWindow, QMessageBox, QStatusBar,
    QToolBar,
)

from dxfview import utils_core as Utils
from dxfview.CommandDispatcher import ViewCommands
from dxfview.EventBus import EventBus
from dxfview.FileManager import FileManager, LoadError
from dxfview.ViewSession import ViewSession

from .canvas_widget import CanvasPanel
from .layer_panel import LayerPanel
from .signals import AppSignals

_ = Utils._

FILETYPES_FILTER = (
    "All accepted (*.dxf *.svg);;"
    "DXF (*.dxf);;"
    "SVG (*.svg);;"
    "All files (*)"
)


class MainWindow(QMainWindow):
    """Main application window.

    Owns the ViewSession and FileManager, wires Qt signals and
    manages layout.
    """

    def __init__(self, session=None, bus=None):
        super().__init__()
        self.bus = bus if bus is not None else EventBus()
        self.session = session if session is not None else ViewSession(
            padding=Utils.getInt("Viewer", "padding", 0),
            default_color=Utils.getStr("Viewer", "default.color", "#FFFFFF"),
            bus=self.bus)
        self.session.show_grid = Utils.getBool("Viewer", "grid", True)
        self.files = FileManager(self.session, self.bus)
        self.commands = ViewCommands(
            self.session, Utils.getFloat("Viewer", "zoom.step", 1.2))
        self.signals = AppSignals()

        self.setWindowTitle(f"{Utils.__prg__} {Utils.__version__}")
        self.resize(1200, 800)

        # --- Central widget: Canvas ---
        self.canvas_panel = CanvasPanel(self.session, self.signals)
        self.canvas_panel.setMinimumWidth(400)
        self.canvas_panel.view.wheel_sensitivity = Utils.getFloat(
            "Viewer", "wheel.sensitivity", 0.001)
        self.setCentralWidget(self.canvas_panel)

        # --- Dock: Layers (left) ---
        self.layer_dock = QDockWidget(_("Layers"), self)
        self.layer_dock.setObjectName("LayerDock")
        self.layer_dock.setAllowedAreas(
            Qt.DockWidgetArea.LeftDockWidgetArea
            | Qt.DockWidgetArea.RightDockWidgetArea)
        self.layer_panel = LayerPanel(self.session)
        self.layer_dock.setWidget(self.layer_panel)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea,
                           self.layer_dock)

        self._setup_statusbar()
        self._setup_menubar()
        self._setup_toolbar()

        # --- EventBus → signals ---
        self.bus.on("status_message", self.signals.status_message.emit)
        self.bus.on("layers_changed",
                    lambda layers: self.signals.layers_changed.emit())
        self.bus.on("view_changed",
                    lambda viewport: self.signals.view_changed.emit())
        self.bus.on("load_failed", lambda fn, exc:
                    self.signals.load_failed.emit(fn, str(exc)))

        # --- Wire signals ---
        self.signals.status_message.connect(self._on_status_message)
        self.signals.canvas_coords.connect(self._on_canvas_coords)
        self.signals.layers_changed.connect(self.layer_panel.fill)
        self.signals.layers_changed.connect(self.canvas_panel.rebuild)
        self.signals.view_changed.connect(self._on_view_changed)
        self.signals.command.connect(self.execute)
        self.signals.open_file.connect(self._on_open_file)
        self.signals.reload_file.connect(self._on_reload)
        self.signals.file_loaded.connect(self._on_file_loaded)
        self.signals.load_failed.connect(self._on_load_failed)
        self.layer_panel.layer_toggled.connect(self._on_layer_toggled)

        self._restore_layout()

    # ------------------------------------------------------------------
    # Status bar
    # ------------------------------------------------------------------
    def _setup_statusbar(self):
        self.statusbar = QStatusBar()
        self.setStatusBar(self.statusbar)

        self._status_label = QLabel(_("Ready"))
        self.statusbar.addWidget(self._status_label, 1)

        self._scale_label = QLabel("")
        self._scale_label.setMinimumWidth(90)
        self._scale_label.setStyleSheet("color: darkblue;")
        self.statusbar.addPermanentWidget(self._scale_label)

        self._coord_x = QLabel("X: 0.000")
        self._coord_x.setMinimumWidth(90)
        self._coord_x.setStyleSheet("color: darkred;")
        self._coord_y = QLabel("Y: 0.000")
        self._coord_y.setMinimumWidth(90)
        self._coord_y.setStyleSheet("color: darkred;")
        self.statusbar.addPermanentWidget(self._coord_x)
        self.statusbar.addPermanentWidget(self._coord_y)

    # ------------------------------------------------------------------
    # Menu bar
    # ------------------------------------------------------------------
    def _setup_menubar(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu(_("&File"))

        open_action = QAction(_("&Open..."), self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(
            lambda checked=False: self.signals.open_file.emit())
        file_menu.addAction(open_action)

        self._recent_menu = file_menu.addMenu(_("Open &Recent"))
        self._build_recent_menu()

        reload_action = QAction(_("&Reload"), self)
        reload_action.setShortcut(QKeySequence("F5"))
        reload_action.triggered.connect(
            lambda checked=False: self.signals.reload_file.emit())
        file_menu.addAction(reload_action)

        file_menu.addSeparator()

        quit_action = QAction(_("&Quit"), self)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        view_menu = menubar.addMenu(_("&View"))
        for label, shortcut, cmd in [
            (_("Zoom &In"), "Ctrl++", "ZOOMIN"),
            (_("Zoom &Out"), "Ctrl+-", "ZOOMOUT"),
            (_("&Reset View"), "Ctrl+0", "FIT"),
        ]:
            action = QAction(label, self)
            action.setShortcut(QKeySequence(shortcut))
            action.triggered.connect(
                lambda checked=False, c=cmd: self.signals.command.emit(c))
            view_menu.addAction(action)

        view_menu.addSeparator()

        self._tool_group = QActionGroup(self)
        self._tool_actions = {}
        for label, cmd in [(_("&Pan"), "PAN"), (_("&Select"), "SELECT")]:
            action = QAction(label, self)
            action.setCheckable(True)
            action.setChecked(self.session.viewport.tool == cmd)
            action.triggered.connect(
                lambda checked=False, c=cmd: self.signals.command.emit(c))
            self._tool_group.addAction(action)
            self._tool_actions[cmd] = action
            view_menu.addAction(action)

        view_menu.addSeparator()

        self._grid_action = QAction(_("&Grid"), self)
        self._grid_action.setCheckable(True)
        self._grid_action.setChecked(self.session.show_grid)
        self._grid_action.triggered.connect(
            lambda checked=False: self.signals.command.emit("GRID"))
        view_menu.addAction(self._grid_action)

        view_menu.addAction(self.layer_dock.toggleViewAction())

        help_menu = menubar.addMenu(_("&Help"))
        about_action = QAction(_("&About"), self)
        about_action.triggered.connect(self._on_about)
        help_menu.addAction(about_action)

    # ------------------------------------------------------------------
    # Toolbar
    # ------------------------------------------------------------------
    def _setup_toolbar(self):
        toolbar = QToolBar("Main")
        toolbar.setObjectName("MainToolBar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        open_action = QAction(_("Open"), self)
        open_action.triggered.connect(
            lambda checked=False: self.signals.open_file.emit())
        toolbar.addAction(open_action)

        toolbar.addSeparator()
        toolbar.addAction(self._tool_actions["PAN"])
        toolbar.addSeparator()

        for label, cmd in [(_("Zoom In"), "ZOOMIN"),
                           (_("Zoom Out"), "ZOOMOUT"),
                           (_("Fit"), "FIT")]:
            action = QAction(label, self)
            action.triggered.connect(
                lambda checked=False, c=cmd: self.signals.command.emit(c))
            toolbar.addAction(action)

        toolbar.addSeparator()
        toolbar.addAction(self._grid_action)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def execute(self, cmd, *args):
        """Run a ViewCommands command and redraw."""
        status = self.commands.execute(cmd, *args)
        self._grid_action.setChecked(self.session.show_grid)
        tool = self._tool_actions.get(self.session.viewport.tool)
        if tool is not None:
            tool.setChecked(True)
        self.canvas_panel.rebuild()
        self._on_status_message(status)
        return status

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------
    def open_file(self, filename):
        """Load a drawing.

        Failures reach the user through AppSignals.load_failed.

        Returns:
            True if the file is now shown.
        """
        width, height = self.canvas_panel.container_size()
        try:
            self.files.load(filename, width, height)
        except LoadError as exc:
            logging.warning("cannot open %s: %s", filename, exc)
            return False
        self.signals.file_loaded.emit(filename)
        return True

    def _on_file_loaded(self, filename):
        self.canvas_panel.rebuild()
        self._update_title()
        self._build_recent_menu()

    def _on_load_failed(self, filename, message):
        QMessageBox.critical(self, _("Error"), message)

    def _on_open_file(self):
        filename, _filt = QFileDialog.getOpenFileName(
            self, _("Open DXF / SVG"), "", FILETYPES_FILTER)
        if filename:
            self.open_file(filename)

    def _on_reload(self):
        if self.files.filename:
            self.open_file(self.files.filename)

    def _build_recent_menu(self):
        """Rebuild the Open Recent submenu from config."""
        self._recent_menu.clear()
        for i in range(Utils._maxRecent):
            filename = Utils.getRecent(i)
            if filename is None:
                break
            label = f"{i + 1}  {os.path.basename(filename)}"
            action = self._recent_menu.addAction(label)
            action.setToolTip(filename)
            action.triggered.connect(
                lambda checked=False, n=i: self._on_load_recent(n))
        if self._recent_menu.isEmpty():
            no_recent = self._recent_menu.addAction(_("(no recent files)"))
            no_recent.setEnabled(False)

    def _on_load_recent(self, index):
        filename = Utils.getRecent(index)
        if filename is not None:
            self.open_file(filename)

    def _update_title(self):
        fname = self.files.filename
        if fname:
            self.setWindowTitle(
                f"{Utils.__prg__} {Utils.__version__}: "
                f"{os.path.basename(fname)}")
        else:
            self.setWindowTitle(f"{Utils.__prg__} {Utils.__version__}")

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------
    def _on_status_message(self, msg):
        self._status_label.setText(msg)

    def _on_layer_toggled(self, layer_id, visible):
        if visible:
            self._on_status_message(_("Layer '{}' shown").format(layer_id))
        else:
            self._on_status_message(_("Layer '{}' hidden").format(layer_id))

    def _on_canvas_coords(self, x, y):
        self._coord_x.setText(f"X: {x:.3f}")
        self._coord_y.setText(f"Y: {y:.3f}")

    def _on_view_changed(self):
        self._scale_label.setText(f"x{self.session.viewport.scale:.4g}")

    def _on_about(self):
        QMessageBox.about(
            self, _("About {}").format(Utils.__prg__),
            f"<h3>{Utils.__title__}</h3>"
            "<p>Viewer for ASCII DXF and SVG drawings.</p>")

    # ------------------------------------------------------------------
    # Layout save / restore
    # ------------------------------------------------------------------
    def _save_layout(self):
        """Save window geometry and dock state to config."""
        geo = base64.b64encode(self.saveGeometry().data()).decode("ascii")
        state = base64.b64encode(self.saveState().data()).decode("ascii")
        Utils.setStr("QtLayout", "geometry", geo)
        Utils.setStr("QtLayout", "state", state)
        Utils.setBool("Viewer", "grid", self.session.show_grid)

    def _restore_layout(self):
        """Restore window geometry and dock state from config."""
        geo = Utils.getStr("QtLayout", "geometry")
        if geo:
            self.restoreGeometry(QByteArray(base64.b64decode(geo)))
        state = Utils.getStr("QtLayout", "state")
        if state:
            self.restoreState(QByteArray(base64.b64decode(state)))

    def closeEvent(self, event):
        """Save layout and configuration on exit."""
        self._save_layout()
        try:
            Utils.saveConfiguration()
        except OSError as exc:
            logging.warning("cannot save configuration: %s", exc)
        event.accept()
