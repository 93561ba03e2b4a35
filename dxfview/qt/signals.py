# Qt signal definitions for dxfview
#
# Central signal hub. EventBus events coming from FileManager and
# ViewSession are forwarded here so widgets only deal with Qt signals.

from PySide6.QtCore import QObject, Signal


class AppSignals(QObject):
    """Central signal hub for the application."""

    # File operations
    open_file = Signal()                   # File > Open
    reload_file = Signal()                 # File > Reload
    file_loaded = Signal(str)              # filename
    load_failed = Signal(str, str)         # filename, message

    # View
    draw_requested = Signal()              # full rebuild of the canvas
    view_changed = Signal()                # scale / pan / tool changed
    layers_changed = Signal()              # layer list or visibility
    command = Signal(str)                  # ViewCommands name

    # Status bar
    status_message = Signal(str)
    canvas_coords = Signal(float, float)   # drawing coordinates
