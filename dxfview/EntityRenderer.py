# EntityRenderer - Scene entities to drawing primitives
#
# Pure mapping from SceneModel entities to SceneGraph primitives under
# the current viewport and layer visibility. Nothing here keeps state
# between calls; ViewSession passes in everything it needs.

from dxfview import PathGeometry
from dxfview.SceneGraph import (
    ArcPrimitive, CirclePrimitive, Drawing, LinePrimitive, PathPrimitive,
    SvgPrimitive, TextPrimitive,
)

DEFAULT_COLOR = "#FFFFFF"

# Font size used for text entities without a height
DEFAULT_TEXT_HEIGHT = 10.0


def layer_index(layers):
    """Map layer id to Layer for quick lookups."""
    return {layer.id: layer for layer in layers or ()}


def resolve_color(entity, layer, default=DEFAULT_COLOR):
    """Entity colour, else layer colour, else default."""
    if entity.color:
        return entity.color
    if layer is not None and layer.color:
        return layer.color
    return default


def is_visible(entity, index):
    """Entities on a layer without view state are always drawn."""
    layer = index.get(entity.layer)
    return layer is None or layer.visible


# -----------------------------------------------------------------------------
def line_primitive(entity, color, width):
    return LinePrimitive(
        [(entity.x1, entity.y1), (entity.x2, entity.y2)],
        stroke=color, width=width, layer=entity.layer, entity=entity)


def polyline_primitive(entity, color, width):
    if len(entity.points) < 2:
        return None
    return PathPrimitive(
        list(entity.points), closed=entity.closed,
        stroke=color, width=width, layer=entity.layer, entity=entity)


def circle_primitive(entity, color, width):
    return CirclePrimitive(
        entity.cx, entity.cy, entity.r,
        stroke=color, width=width, layer=entity.layer, entity=entity)


def arc_primitive(entity, color, width):
    start, end = PathGeometry.arc_endpoints(
        entity.cx, entity.cy, entity.r,
        entity.start_angle, entity.end_angle)
    return ArcPrimitive(
        entity.cx, entity.cy, entity.r, start, end,
        entity.start_angle,
        PathGeometry.arc_span(entity.start_angle, entity.end_angle),
        PathGeometry.large_arc_flag(entity.start_angle, entity.end_angle),
        sweep=1, stroke=color, width=width,
        layer=entity.layer, entity=entity)


def text_primitive(entity, color, width):
    return TextPrimitive(
        entity.x, entity.y, entity.content, fill=color,
        height=entity.height or DEFAULT_TEXT_HEIGHT,
        flip_y=True, layer=entity.layer, entity=entity)


PRIMITIVES = {
    "LINE": line_primitive,
    "LWPOLYLINE": polyline_primitive,
    "CIRCLE": circle_primitive,
    "ARC": arc_primitive,
    "TEXT": text_primitive,
    "MTEXT": text_primitive,
}


def render_entity(entity, index, width, default=DEFAULT_COLOR):
    """Return the primitive for one entity, or None if not drawn."""
    if not is_visible(entity, index):
        return None
    make = PRIMITIVES.get(entity.type)
    if make is None:
        return None
    color = resolve_color(entity, index.get(entity.layer), default)
    return make(entity, color, width)


def render_scene(scene, layers, viewport, default=DEFAULT_COLOR):
    """Build the Drawing for a parsed scene.

    Args:
        scene: SceneModel.Scene to draw.
        layers: Iterable of Layer view states (id, color, visible).
        viewport: ViewTransform.Viewport supplying the transform.
        default: Colour used when neither entity nor layer has one.

    Returns:
        SceneGraph.Drawing in entity order, hidden layers left out.
    """
    width = viewport.stroke_width()
    drawing = Drawing(viewport.transform(), width)
    if scene is None:
        return drawing
    index = layer_index(layers)
    for entity in scene.entities:
        primitive = render_entity(entity, index, width, default)
        if primitive is not None:
            drawing.add(primitive)
    return drawing


def render_svg(svg_scene, layers, viewport):
    """Build the Drawing for an opaque SVG document.

    SVG is already Y-down, so it gets translate(pan) scale(s) with no
    flip. The whole document follows the visibility of its single layer.
    """
    drawing = Drawing(viewport.transform(), viewport.stroke_width())
    if svg_scene is None:
        return drawing
    layer = next(iter(layers or ()), None)
    if layer is not None and not layer.visible:
        return drawing
    name = layer.id if layer is not None else "all"
    drawing.add(SvgPrimitive(svg_scene.markup, viewport.svg_transform(),
                             layer=name))
    return drawing
