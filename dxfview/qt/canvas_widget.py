# Qt Canvas Widget - QGraphicsView-based drawing viewer
#
# Renders the SceneGraph Drawing produced by ViewSession. The view
# itself stays at identity: scene coordinates are viewport pixels and
# the Viewport's affine transform is applied to one root item holding
# all entity items. Pens are sized in drawing units (1 / scale) so
# lines stay about a pixel wide at any zoom.

from PySide6.QtCore import Qt, QByteArray, QPointF, QRectF, Signal
from PySide6.QtGui import (
    QBrush, QColor, QFont, QFontMetricsF, QPainter, QPainterPath, QPen,
    QPolygonF, QTransform, QMouseEvent, QWheelEvent,
)
from PySide6.QtSvg import QSvgRenderer
from PySide6.QtSvgWidgets import QGraphicsSvgItem
from PySide6.QtWidgets import (
    QFrame, QGraphicsEllipseItem, QGraphicsItemGroup, QGraphicsLineItem,
    QGraphicsPathItem, QGraphicsScene, QGraphicsSimpleTextItem,
    QGraphicsView, QVBoxLayout, QWidget,
)

from dxfview import PathGeometry
from dxfview.ViewTransform import WHEEL_SENSITIVITY
from dxfview.SceneGraph import (
    ArcPrimitive, CirclePrimitive, LinePrimitive, PathPrimitive,
    SvgPrimitive, TextPrimitive,
)

COLORS = {
    "background": QColor("#111111"),
    "grid": QColor("#333333"),
}

# Glyphs are laid out at this pixel size and scaled to the text height
TEXT_FONT_PX = 100


def qtransform(affine):
    """QTransform from an (a, b, c, d, e, f) affine tuple."""
    a, b, c, d, e, f = affine
    return QTransform(a, b, c, d, e, f)


class DrawingScene(QGraphicsScene):
    """Scene holding the items of the current Drawing.

    Entity items are children of ``root``; an SVG document is a
    separate top-level item with its own unflipped transform. Moving
    the view only needs new transforms on those two items.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.root = None
        self.svg_item = None
        self._svg_renderer = None
        self._font = QFont()
        self._font.setPixelSize(TEXT_FONT_PX)
        self._ascent = QFontMetricsF(self._font).ascent()

    def rebuild(self, drawing):
        """Clear and recreate every item from a Drawing."""
        self.clear()
        self.svg_item = None
        self._svg_renderer = None
        self.root = QGraphicsItemGroup()
        self.root.setTransform(qtransform(drawing.transform))
        self.addItem(self.root)

        for prim in drawing.all_primitives():
            if isinstance(prim, SvgPrimitive):
                self._add_svg(prim)
            elif isinstance(prim, LinePrimitive):
                self._add_line(prim)
            elif isinstance(prim, PathPrimitive):
                self._add_path(prim)
            elif isinstance(prim, CirclePrimitive):
                self._add_circle(prim)
            elif isinstance(prim, ArcPrimitive):
                self._add_arc(prim)
            elif isinstance(prim, TextPrimitive):
                self._add_text(prim)

    def set_view(self, viewport):
        """Move the drawing to a Viewport without rebuilding (pan only)."""
        if self.root is not None:
            self.root.setTransform(qtransform(viewport.transform()))
        if self.svg_item is not None:
            self.svg_item.setTransform(qtransform(viewport.svg_transform()))

    def entity_items(self):
        if self.root is None:
            return []
        return self.root.childItems()

    # ------------------------------------------------------------------
    def _make_pen(self, color, width):
        pen = QPen(QColor(color))
        pen.setWidthF(width)
        return pen

    def _add_line(self, prim):
        (x1, y1), (x2, y2) = prim.coords
        item = QGraphicsLineItem(x1, y1, x2, y2, self.root)
        item.setPen(self._make_pen(prim.stroke, prim.width))
        return item

    def _add_path(self, prim):
        path = QPainterPath()
        path.moveTo(*prim.coords[0])
        for x, y in prim.coords[1:]:
            path.lineTo(x, y)
        if prim.closed:
            path.closeSubpath()
        return self._add_path_item(path, prim)

    def _add_circle(self, prim):
        item = QGraphicsEllipseItem(
            prim.cx - prim.r, prim.cy - prim.r, 2 * prim.r, 2 * prim.r,
            self.root)
        item.setPen(self._make_pen(prim.stroke, prim.width))
        item.setBrush(QBrush(Qt.BrushStyle.NoBrush))
        return item

    def _add_arc(self, prim):
        points = PathGeometry.sample_arc(
            prim.cx, prim.cy, prim.r, prim.start_angle, prim.span)
        path = QPainterPath()
        path.moveTo(*points[0])
        for x, y in points[1:]:
            path.lineTo(x, y)
        return self._add_path_item(path, prim)

    def _add_path_item(self, path, prim):
        item = QGraphicsPathItem(path, self.root)
        item.setPen(self._make_pen(prim.stroke, prim.width))
        item.setBrush(QBrush(Qt.BrushStyle.NoBrush))
        return item

    def _add_text(self, prim):
        item = QGraphicsSimpleTextItem(prim.text, self.root)
        item.setFont(self._font)
        item.setBrush(QBrush(QColor(prim.fill)))
        k = prim.height / TEXT_FONT_PX
        # Lay the glyphs out Y-down with the baseline on the anchor,
        # then mirror them about the anchor to undo the global flip.
        item.setTransform(
            QTransform.fromScale(k, k)
            * QTransform.fromTranslate(prim.x, prim.y - k * self._ascent)
            * qtransform(prim.local_transform()))
        return item

    def _add_svg(self, prim):
        self._svg_renderer = QSvgRenderer(
            QByteArray(prim.markup.encode("utf-8")))
        item = QGraphicsSvgItem()
        item.setSharedRenderer(self._svg_renderer)
        item.setTransform(qtransform(prim.transform))
        self.addItem(item)
        self.svg_item = item
        return item


class CanvasView(QGraphicsView):
    """QGraphicsView driving a ViewSession's Viewport.

    Left-button drag pans under the pan tool, the wheel zooms about
    the transform origin, hovering reports drawing coordinates.
    """

    coords_changed = Signal(float, float)
    view_changed = Signal()

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.drawing_scene = DrawingScene(self)
        self.setScene(self.drawing_scene)
        self.session = session
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setAlignment(
            Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setHorizontalScrollBarPolicy(
            Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(
            Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setViewportUpdateMode(
            QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setMouseTracking(True)
        self.wheel_sensitivity = WHEEL_SENSITIVITY

    def refresh(self):
        """Rebuild all items from the session."""
        self.drawing_scene.rebuild(self.session.render())
        self.viewport().update()

    def _sync_rect(self):
        w = self.viewport().width()
        h = self.viewport().height()
        self.setSceneRect(QRectF(0, 0, w, h))
        self.session.resize(w, h)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._sync_rect()
        self.viewport().update()

    def drawBackground(self, painter, rect):
        painter.fillRect(rect, COLORS["background"])
        dots = self.session.grid_dots()
        if not dots:
            return
        painter.setPen(QPen(COLORS["grid"], 2))
        painter.drawPoints(QPolygonF([QPointF(x, y) for x, y in dots]))

    def wheelEvent(self, event: QWheelEvent):
        """Zoom with the mouse wheel; up zooms in."""
        self.session.viewport.wheel(-event.angleDelta().y(),
                                    self.wheel_sensitivity)
        self.refresh()
        self.view_changed.emit()
        event.accept()

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            if self.session.viewport.begin_drag(pos.x(), pos.y()):
                self.setCursor(Qt.CursorShape.ClosedHandCursor)
                event.accept()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()
        viewport = self.session.viewport
        if viewport.drag_to(pos.x(), pos.y()):
            self.drawing_scene.set_view(viewport)
            self.viewport().update()
            self.view_changed.emit()
            event.accept()
            return
        x, y = viewport.to_data(pos.x(), pos.y())
        self.coords_changed.emit(x, y)
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self.session.viewport.end_drag()
            self.setCursor(Qt.CursorShape.CrossCursor)
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        self.session.viewport.end_drag()
        super().leaveEvent(event)


class CanvasPanel(QWidget):
    """Canvas area of the main window."""

    def __init__(self, session, signals, parent=None):
        super().__init__(parent)
        self.session = session
        self.signals = signals

        self.view = CanvasView(session)
        self.view.setCursor(Qt.CursorShape.CrossCursor)
        self.scene = self.view.drawing_scene

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.view)

        self.view.coords_changed.connect(self.signals.canvas_coords.emit)
        self.view.view_changed.connect(self.signals.view_changed.emit)
        self.signals.draw_requested.connect(self.rebuild)

    def container_size(self):
        vp = self.view.viewport()
        return vp.width(), vp.height()

    def rebuild(self):
        """Full redraw."""
        self.view.refresh()
