# FileManager - Toolkit-independent file loading
#
# Reads .dxf and .svg files into the ViewSession with EventBus
# notifications. The UI layer subscribes to the events and shows
# dialogs; nothing here touches Qt.
#
# Loads are serialized: a second load while one is running is
# rejected. A failed load leaves the current scene in place.

import logging
import os

from dxfview import utils_core as Utils
from dxfview.DxfParser import parse_dxf
from dxfview.EventBus import bus as event_bus
from dxfview.SceneModel import SvgScene

_ = Utils._

EXTENSIONS = (".dxf", ".svg")


class LoadError(Exception):
    """A file could not be shown."""


class UnsupportedFormat(LoadError):
    """The file extension is neither .dxf nor .svg."""


class FileReadError(LoadError):
    """The file could not be read from disk."""


class LoadInProgress(LoadError):
    """Another load has not finished yet."""


def file_type(filename):
    """Return "dxf" or "svg" for an accepted filename.

    Raises:
        UnsupportedFormat: for any other extension.
    """
    ext = os.path.splitext(filename)[1].lower()
    if ext not in EXTENSIONS:
        raise UnsupportedFormat(_("Unsupported format. Use DXF or SVG."))
    return ext[1:]


def read_text(filename):
    """Read a drawing as text; undecodable bytes are replaced."""
    try:
        with open(filename, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as exc:
        raise FileReadError(
            _("Error reading file: {}").format(exc)) from exc


class FileManager:
    """Loads drawings into a ViewSession.

    Events emitted:
        "load_started"     (filename)
        "scene_loaded"     (filename, scene)
        "svg_loaded"       (filename, svg_scene)
        "load_failed"      (filename, error)
        "status_message"   (message)
    """

    def __init__(self, session, bus=None):
        """
        Args:
            session: The ViewSession receiving loaded drawings.
            bus: EventBus to notify; the shared bus by default.
        """
        self.session = session
        self.filename = None
        self._bus = bus if bus is not None else event_bus
        self._loading = False

    @property
    def loading(self):
        return self._loading

    def load(self, filename, width=None, height=None):
        """Read and show a file.

        Args:
            filename: Path of a .dxf or .svg file.
            width, height: Container size for fit-to-screen; the
                           session's last size when omitted.

        Returns:
            str: "dxf" or "svg".

        Raises:
            UnsupportedFormat, FileReadError, LoadInProgress
        """
        self._begin(filename)
        try:
            self._announce(filename)
            kind = file_type(filename)
            text = read_text(filename)
            self._show(filename, kind, text, width, height)
        except LoadError as exc:
            self._fail(filename, exc)
            raise
        finally:
            self._loading = False
        Utils.addRecent(filename)
        return kind

    def load_text(self, filename, text, width=None, height=None):
        """Show already-read file contents; filename picks the format."""
        self._begin(filename)
        try:
            self._announce(filename)
            kind = file_type(filename)
            self._show(filename, kind, text, width, height)
        except LoadError as exc:
            self._fail(filename, exc)
            raise
        finally:
            self._loading = False
        return kind

    def reload(self, width=None, height=None):
        """Load the current file again; None when nothing is open."""
        if self.filename is None:
            return None
        return self.load(self.filename, width, height)

    # ------------------------------------------------------------------
    def _begin(self, filename):
        if self._loading:
            exc = LoadInProgress(
                _("Another file is still loading"))
            self._fail(filename, exc)
            raise exc
        self._loading = True

    def _announce(self, filename):
        self._bus.emit("load_started", filename)
        self._bus.emit("status_message",
                       _("Loading: {} ...").format(filename))

    def _show(self, filename, kind, text, width, height):
        if kind == "dxf":
            scene = parse_dxf(text)
            self.session.load_scene(scene, width, height)
            self.filename = filename
            self._bus.emit("scene_loaded", filename, scene)
        else:
            svg = SvgScene(text)
            self.session.load_svg(svg, width, height)
            self.filename = filename
            self._bus.emit("svg_loaded", filename, svg)
        self._bus.emit("status_message",
                       _("'{}' loaded").format(filename))

    def _fail(self, filename, exc):
        logging.warning("loading %s failed: %s", filename, exc)
        self._bus.emit("load_failed", filename, exc)
        self._bus.emit("status_message", str(exc))
