# Qt Layer Panel - layer list with visibility toggles
#
# Lists the ViewSession's layers with their colour swatch and a
# check box per layer, plus a footer with the entity count and the
# drawing size. Toggling a layer only changes its view state.

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QIcon, QPixmap
from PySide6.QtWidgets import (
    QLabel, QListWidget, QListWidgetItem, QVBoxLayout, QWidget,
)

SWATCH_SIZE = 12


def _swatch(color):
    pixmap = QPixmap(SWATCH_SIZE, SWATCH_SIZE)
    pixmap.fill(QColor(color))
    return QIcon(pixmap)


class LayerPanel(QWidget):
    """Checkable layer list bound to a ViewSession."""

    layer_toggled = Signal(str, bool)

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session

        self.title = QLabel()
        self.list = QListWidget()
        self.list.itemChanged.connect(self._on_item_changed)
        self.footer = QLabel()
        self.footer.setStyleSheet("color: gray;")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addWidget(self.title)
        layout.addWidget(self.list, 1)
        layout.addWidget(self.footer)

        self.fill()

    def fill(self):
        """Bring the list in line with the session's layers.

        When the layer ids are unchanged only the check boxes are
        updated, so an item is never deleted from its own signal.
        """
        ids = [layer.id for layer in self.session.layers]
        self.list.blockSignals(True)
        if ids and ids == self._item_ids():
            for row, layer in enumerate(self.session.layers):
                self.list.item(row).setCheckState(
                    Qt.CheckState.Checked if layer.visible
                    else Qt.CheckState.Unchecked)
        else:
            self._rebuild()
        self.list.blockSignals(False)
        self._update_labels()

    def _item_ids(self):
        return [self.list.item(row).data(Qt.ItemDataRole.UserRole)
                for row in range(self.list.count())]

    def _rebuild(self):
        self.list.clear()
        for layer in self.session.layers:
            item = QListWidgetItem(_swatch(layer.color), layer.name)
            item.setData(Qt.ItemDataRole.UserRole, layer.id)
            item.setFlags(Qt.ItemFlag.ItemIsEnabled
                          | Qt.ItemFlag.ItemIsUserCheckable)
            item.setCheckState(Qt.CheckState.Checked if layer.visible
                               else Qt.CheckState.Unchecked)
            self.list.addItem(item)
        if not self.session.layers:
            item = QListWidgetItem("No layers")
            item.setFlags(Qt.ItemFlag.NoItemFlags)
            self.list.addItem(item)

    def _update_labels(self):
        self.title.setText(f"Layers ({len(self.session.layers)})")
        scene = self.session.scene
        if scene is None:
            self.footer.setText("")
        else:
            info = scene.summary()
            self.footer.setText(
                f"Entities: {info['entities']}\n"
                f"Bounds: {info['width']} x {info['height']}")

    def item_for(self, layer_id):
        for row in range(self.list.count()):
            item = self.list.item(row)
            if item.data(Qt.ItemDataRole.UserRole) == layer_id:
                return item
        return None

    def _on_item_changed(self, item):
        layer_id = item.data(Qt.ItemDataRole.UserRole)
        if layer_id is None:
            return
        visible = item.checkState() == Qt.CheckState.Checked
        if self.session.set_layer_visible(layer_id, visible):
            self.layer_toggled.emit(layer_id, visible)
