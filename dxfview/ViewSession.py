# ViewSession - State of one open drawing in the viewer
#
# Owns the loaded scene, the per-layer view state and the Viewport,
# and hands them to EntityRenderer. The Scene itself is never touched
# after loading: hiding a layer only flips the Layer record here.

import logging

from dxfview import EntityRenderer, PathGeometry
from dxfview.EventBus import bus as event_bus
from dxfview.SceneGraph import Drawing
from dxfview.ViewTransform import Viewport

# Colours handed out to layers in order of their sorted names
LAYER_COLORS = ["#FBBF24", "#34D399", "#60A5FA", "#F472B6", "#A78BFA",
                "#F87171"]

SVG_LAYER_ID = "all"


class Layer:
    """View state of one drawing layer."""

    __slots__ = ("id", "name", "color", "visible")

    def __init__(self, id, name=None, color="#FFFFFF", visible=True):
        self.id = id
        self.name = name if name is not None else id
        self.color = color
        self.visible = visible

    def __repr__(self):
        state = "on" if self.visible else "off"
        return f"Layer({self.id!r}, {self.color}, {state})"


def layer_color(index):
    return LAYER_COLORS[index % len(LAYER_COLORS)]


def layers_for_scene(scene):
    """Fresh, all-visible layer states for a parsed scene."""
    return [Layer(name, name, layer_color(i))
            for i, name in enumerate(scene.layers)]


class ViewSession:
    """Scene, layers and viewport of the viewer.

    Exactly one of ``scene`` (DXF) and ``svg`` is set while a file is
    open; both are None before the first load.
    """

    def __init__(self, padding=0, default_color=EntityRenderer.DEFAULT_COLOR,
                 bus=None):
        self.padding = padding
        self.default_color = default_color
        self.viewport = Viewport()
        self.scene = None
        self.svg = None
        self.layers = []
        self.show_grid = True
        self.width = 0
        self.height = 0
        self._bus = bus if bus is not None else event_bus

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load_scene(self, scene, width=None, height=None):
        """Show a parsed DXF scene and fit it to the container."""
        if width is not None and height is not None:
            self.width, self.height = width, height
        self.svg = None
        self.scene = scene
        self.layers = layers_for_scene(scene)
        self.viewport.reset_state()
        self.viewport.fit_to_screen(
            scene.extents, self.width, self.height, self.padding)
        logging.info("scene shown: %d entities on %d layers, scale %g",
                     len(scene.entities), len(self.layers),
                     self.viewport.scale)
        self._changed(layers=True)

    def load_svg(self, svg_scene, width=None, height=None):
        """Show an SVG document at identity scale."""
        if width is not None and height is not None:
            self.width, self.height = width, height
        self.scene = None
        self.svg = svg_scene
        self.layers = [Layer(SVG_LAYER_ID, "SVG Layer", "#FFFFFF")]
        self.viewport.reset_state()
        self.viewport.forget()
        self._changed(layers=True)

    def clear(self):
        self.scene = None
        self.svg = None
        self.layers = []
        self.viewport.reset_state()
        self.viewport.forget()
        self._changed(layers=True)

    def has_content(self):
        return self.scene is not None or self.svg is not None

    def resize(self, width, height):
        """Record the container size used by later fits."""
        self.width, self.height = width, height
        self.viewport.resize(width, height)

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------
    def layer(self, layer_id):
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def toggle_layer(self, layer_id):
        """Flip a layer's visibility; returns the new state or None."""
        layer = self.layer(layer_id)
        if layer is None:
            return None
        layer.visible = not layer.visible
        self._changed(layers=True)
        return layer.visible

    def set_layer_visible(self, layer_id, visible):
        layer = self.layer(layer_id)
        if layer is None or layer.visible == bool(visible):
            return False
        layer.visible = bool(visible)
        self._changed(layers=True)
        return True

    def set_all_visible(self, visible):
        for layer in self.layers:
            layer.visible = bool(visible)
        self._changed(layers=True)

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------
    def reset_view(self):
        """Fit the current scene again, or identity when none is loaded."""
        if self.scene is not None:
            self.viewport.fit_to_screen(
                self.scene.extents, self.width, self.height, self.padding)
        else:
            self.viewport.reset_state()
        self._changed()

    def zoom(self, factor):
        scale = self.viewport.zoom(factor)
        self._changed()
        return scale

    def toggle_grid(self):
        self.show_grid = not self.show_grid
        self._changed()
        return self.show_grid

    def grid_dots(self):
        """Screen positions of the background grid, or [] when hidden."""
        if not self.show_grid:
            return []
        vp = self.viewport
        return PathGeometry.generate_grid_dots(
            self.width, self.height, vp.scale, vp.pan_x, vp.pan_y)

    def render(self):
        """Drawing of whatever is loaded under the current view."""
        if self.svg is not None:
            return EntityRenderer.render_svg(
                self.svg, self.layers, self.viewport)
        if self.scene is not None:
            return EntityRenderer.render_scene(
                self.scene, self.layers, self.viewport, self.default_color)
        return Drawing(self.viewport.transform(),
                       self.viewport.stroke_width())

    def notify_view_changed(self):
        """Announce a viewport change made directly on the Viewport."""
        self._changed()

    def _changed(self, layers=False):
        if layers:
            self._bus.emit("layers_changed", self.layers)
        self._bus.emit("view_changed", self.viewport)
