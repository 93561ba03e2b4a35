# SceneGraph - Toolkit-independent drawing primitive representation
#
# EntityRenderer turns a parsed Scene into a Drawing made of the
# primitives below. A backend (the Qt canvas, a test) then walks the
# Drawing to produce actual output.
#
# Primitives are in drawing coordinates (Y up). The Drawing carries
# the affine transform that maps them to the screen, so backends do
# not need to know about the Viewport.


class LinePrimitive:
    """A single line segment."""

    __slots__ = ("coords", "stroke", "width", "layer", "entity")

    def __init__(self, coords, stroke="#FFFFFF", width=1.0, layer=None,
                 entity=None):
        """
        Args:
            coords: Two (x, y) drawing-space points.
            stroke: Line colour string.
            width: Line width in drawing units.
            layer: Name of the DXF layer the line came from.
            entity: The source SceneModel entity.
        """
        self.coords = coords
        self.stroke = stroke
        self.width = width
        self.layer = layer
        self.entity = entity


class PathPrimitive:
    """An open or closed polyline path."""

    __slots__ = ("coords", "closed", "stroke", "width", "layer", "entity")

    def __init__(self, coords, closed=False, stroke="#FFFFFF", width=1.0,
                 layer=None, entity=None):
        self.coords = coords
        self.closed = closed
        self.stroke = stroke
        self.width = width
        self.layer = layer
        self.entity = entity

    def segments(self):
        """Line segments visited by the path, including the closing one."""
        pts = list(self.coords)
        if self.closed and len(pts) > 1:
            pts.append(pts[0])
        return list(zip(pts, pts[1:]))


class CirclePrimitive:
    """An unfilled circle."""

    __slots__ = ("cx", "cy", "r", "stroke", "width", "layer", "entity")

    def __init__(self, cx, cy, r, stroke="#FFFFFF", width=1.0, layer=None,
                 entity=None):
        self.cx = cx
        self.cy = cy
        self.r = r
        self.stroke = stroke
        self.width = width
        self.layer = layer
        self.entity = entity


class ArcPrimitive:
    """A counter-clockwise circular arc between two points.

    start and end are the Cartesian end points, large_arc and sweep
    follow the SVG elliptical-arc flags. span is the CCW angular extent
    in degrees and start_angle the source start angle, for backends that
    draw arcs from angles.
    """

    __slots__ = ("cx", "cy", "r", "start", "end", "start_angle", "span",
                 "large_arc", "sweep", "stroke", "width", "layer", "entity")

    def __init__(self, cx, cy, r, start, end, start_angle, span,
                 large_arc, sweep=1, stroke="#FFFFFF", width=1.0,
                 layer=None, entity=None):
        self.cx = cx
        self.cy = cy
        self.r = r
        self.start = start
        self.end = end
        self.start_angle = start_angle
        self.span = span
        self.large_arc = large_arc
        self.sweep = sweep
        self.stroke = stroke
        self.width = width
        self.layer = layer
        self.entity = entity


class TextPrimitive:
    """A text label anchored at a drawing point.

    flip_y asks the backend to mirror the glyphs locally around the
    anchor, undoing the global Y flip so the text reads upright.
    """

    __slots__ = ("x", "y", "text", "fill", "height", "flip_y",
                 "layer", "entity")

    def __init__(self, x, y, text, fill="#FFFFFF", height=10.0,
                 flip_y=True, layer=None, entity=None):
        self.x = x
        self.y = y
        self.text = text
        self.fill = fill
        self.height = height
        self.flip_y = flip_y
        self.layer = layer
        self.entity = entity

    def local_transform(self):
        """Affine (a, b, c, d, e, f) applied around the anchor point."""
        if not self.flip_y:
            return (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
        # scale(1, -1) about (x, y)
        return (1.0, 0.0, 0.0, -1.0, 0.0, 2.0 * self.y)


class SvgPrimitive:
    """Opaque SVG markup drawn with its own (unflipped) transform."""

    __slots__ = ("markup", "transform", "layer")

    def __init__(self, markup, transform, layer=None):
        self.markup = markup
        self.transform = transform
        self.layer = layer


class Drawing:
    """Primitives forming one rendered frame, in entity (file) order.

    Attributes:
        transform: Affine (a, b, c, d, e, f) from drawing to screen.
        stroke_width: Line width in drawing units (1 / scale).
    """

    def __init__(self, transform=(1.0, 0.0, 0.0, 1.0, 0.0, 0.0),
                 stroke_width=1.0):
        self.transform = transform
        self.stroke_width = stroke_width
        self._items = []

    def add(self, primitive):
        self._items.append(primitive)
        return primitive

    def all_primitives(self):
        """Yield every primitive in the order it was added."""
        yield from self._items

    def __len__(self):
        return len(self._items)

    def is_empty(self):
        return len(self) == 0
