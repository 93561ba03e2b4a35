# DxfParser - ASCII DXF to Scene
#
# Walks the tag stream produced by TagReader, tracks the current
# section and turns every supported entity of the ENTITIES section
# into an immutable SceneModel record. Bounds are accumulated while
# reading so the viewer can fit the drawing without a second pass.
#
# Parsing is lenient: a bad number reads as 0, unsupported entities
# are skipped and non-DXF text gives an empty scene.

import logging
import math

from dxfview import SceneModel
from dxfview.TagReader import TagStream

# Small AutoCAD Color Index palette (index 1..9)
ACI_COLORS = {
    1: "#EF4444",  # red
    2: "#EAB308",  # yellow
    3: "#22C55E",  # green
    4: "#06B6D4",  # cyan
    5: "#3B82F6",  # blue
    6: "#D946EF",  # magenta
    7: "#FFFFFF",  # white/black
    8: "#9CA3AF",  # gray
    9: "#E5E7EB",  # light gray
}

# Polyline vertex states
AWAITING_X = 0
HAVE_X = 1


def to_float(value):
    """Convert a tag value to float; garbage and non-finite read as 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def to_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(to_float(value))


def aci_color(value):
    """Return the palette colour of an ACI index string, or None."""
    return ACI_COLORS.get(to_int(value))


# =============================================================================
# Bounds accumulator
# =============================================================================
class Bounds:
    """Running min/max per axis; an axis never touched stays empty."""

    def __init__(self):
        self.min_x = math.inf
        self.min_y = math.inf
        self.max_x = -math.inf
        self.max_y = -math.inf

    def add_x(self, x):
        if x < self.min_x:
            self.min_x = x
        if x > self.max_x:
            self.max_x = x

    def add_y(self, y):
        if y < self.min_y:
            self.min_y = y
        if y > self.max_y:
            self.max_y = y

    def add(self, x, y):
        self.add_x(x)
        self.add_y(y)

    def is_empty(self):
        return self.min_x == math.inf and self.min_y == math.inf

    def extents(self):
        """Return Extents, falling back to the placeholder per axis."""
        pmin_x, pmin_y, pmax_x, pmax_y = SceneModel.PLACEHOLDER
        if self.min_x == math.inf:
            min_x, max_x = pmin_x, pmax_x
        else:
            min_x, max_x = self.min_x, self.max_x
        if self.min_y == math.inf:
            min_y, max_y = pmin_y, pmax_y
        else:
            min_y, max_y = self.min_y, self.max_y
        return SceneModel.Extents(min_x, min_y, max_x, max_y)


# =============================================================================
# Entity builders
# =============================================================================
class EntityBuilder:
    """Collects the tags of one entity until the next code 0.

    Subclasses handle their geometry codes in ``geometry()`` and
    produce the finished record in ``build()``. Common properties
    (layer, colour) are handled here.
    """

    kind = None

    def __init__(self, bounds, layers):
        self.bounds = bounds
        self.layers = layers
        self.layer = SceneModel.DEFAULT_LAYER
        self.color = None

    def feed(self, code, value):
        if code == 8:
            self.layer = value or SceneModel.DEFAULT_LAYER
            self.layers.add(self.layer)
        elif code == 62:
            self.color = aci_color(value)
        else:
            self.geometry(code, value)

    def geometry(self, code, value):
        pass

    def build(self):
        raise NotImplementedError


class LineBuilder(EntityBuilder):
    kind = "LINE"

    def __init__(self, bounds, layers):
        super().__init__(bounds, layers)
        self.x1 = self.y1 = self.x2 = self.y2 = 0.0

    def geometry(self, code, value):
        if code == 10:
            self.x1 = to_float(value)
        elif code == 20:
            self.y1 = to_float(value)
        elif code == 11:
            self.x2 = to_float(value)
        elif code == 21:
            self.y2 = to_float(value)
            # Both endpoints are known once the end Y arrives
            self.bounds.add(self.x1, self.y1)
            self.bounds.add(self.x2, self.y2)

    def build(self):
        return SceneModel.Line(self.x1, self.y1, self.x2, self.y2,
                               self.layer, self.color)


class PolylineBuilder(EntityBuilder):
    """LWPOLYLINE: codes 10/20 repeat once per vertex."""

    kind = "LWPOLYLINE"

    def __init__(self, bounds, layers):
        super().__init__(bounds, layers)
        self.points = []
        self.closed = False
        self.state = AWAITING_X
        self.pending_x = 0.0

    def geometry(self, code, value):
        if code == 10:
            self.pending_x = to_float(value)
            self.state = HAVE_X
        elif code == 20:
            x = self.pending_x if self.state == HAVE_X else 0.0
            y = to_float(value)
            self.points.append((x, y))
            self.bounds.add(x, y)
            self.state = AWAITING_X
            self.pending_x = 0.0
        elif code == 70:
            self.closed = bool(to_int(value) & 1)

    def build(self):
        return SceneModel.Polyline(tuple(self.points), self.closed,
                                   self.layer, self.color)


class CircleBuilder(EntityBuilder):
    kind = "CIRCLE"

    def __init__(self, bounds, layers):
        super().__init__(bounds, layers)
        self.cx = self.cy = self.r = 0.0

    def geometry(self, code, value):
        if code == 10:
            self.cx = to_float(value)
        elif code == 20:
            self.cy = to_float(value)
        elif code == 40:
            self.r = to_float(value)
            self.bounds.add(self.cx - self.r, self.cy - self.r)
            self.bounds.add(self.cx + self.r, self.cy + self.r)

    def build(self):
        return SceneModel.Circle(self.cx, self.cy, self.r,
                                 self.layer, self.color)


class ArcBuilder(EntityBuilder):
    # Arcs do not contribute to the bounds
    kind = "ARC"

    def __init__(self, bounds, layers):
        super().__init__(bounds, layers)
        self.cx = self.cy = self.r = 0.0
        self.start = self.end = 0.0

    def geometry(self, code, value):
        if code == 10:
            self.cx = to_float(value)
        elif code == 20:
            self.cy = to_float(value)
        elif code == 40:
            self.r = to_float(value)
        elif code == 50:
            self.start = to_float(value)
        elif code == 51:
            self.end = to_float(value)

    def build(self):
        return SceneModel.Arc(self.cx, self.cy, self.r, self.start,
                              self.end, self.layer, self.color)


class TextBuilder(EntityBuilder):
    """TEXT and MTEXT; only the anchor X reaches the bounds."""

    def __init__(self, bounds, layers, kind="TEXT"):
        super().__init__(bounds, layers)
        self.kind = kind
        self.x = self.y = self.height = 0.0
        self.content = ""

    def geometry(self, code, value):
        if code == 10:
            self.x = to_float(value)
            self.bounds.add_x(self.x)
        elif code == 20:
            self.y = to_float(value)
        elif code == 40:
            self.height = to_float(value)
        elif code == 1:
            self.content = value

    def build(self):
        return SceneModel.Text(self.x, self.y, self.height, self.content,
                               self.layer, self.color, self.kind)


BUILDERS = {
    "LINE": LineBuilder,
    "LWPOLYLINE": PolylineBuilder,
    "CIRCLE": CircleBuilder,
    "ARC": ArcBuilder,
    "TEXT": TextBuilder,
    "MTEXT": lambda bounds, layers: TextBuilder(bounds, layers, "MTEXT"),
}


# =============================================================================
# Parser
# =============================================================================
class DxfParser:
    """Single-pass parser over the tags of one DXF text.

    The parser is either idle (``builder is None``) or building one
    entity. A builder is committed to the output only when the next
    code 0 arrives, when the section ends or at end of stream.
    """

    def __init__(self, text):
        self._tags = TagStream(text)
        self.section = ""
        self.builder = None
        self.entities = []
        self.layers = set()
        self.bounds = Bounds()
        self.skipped = {}

    def parse(self):
        """Consume the whole stream and return a SceneModel.Scene."""
        tags = self._tags
        while True:
            tag = tags.next_tag()
            if tag is None:
                break
            code, value = tag

            if code == 0 and value == "SECTION":
                header = tags.next_tag()
                self.section = header[1] if header is not None else ""
                continue
            if code == 0 and value == "ENDSEC":
                self._commit()
                self.section = ""
                continue

            if self.section != "ENTITIES":
                continue

            if code == 0:
                self._commit()
                self._start(value)
            elif self.builder is not None and code is not None:
                self.builder.feed(code, value)

        self._commit()

        scene = SceneModel.Scene(
            self.entities, self.layers, self.bounds.extents())
        logging.debug(
            "DXF parsed: %d entities, %d layers, extents %s, skipped %s",
            len(scene.entities), len(scene.layers),
            tuple(scene.extents), self.skipped or "nothing")
        return scene

    def _start(self, name):
        factory = BUILDERS.get(name)
        if factory is None:
            self.builder = None
            if name and name != "EOF":
                self.skipped[name] = self.skipped.get(name, 0) + 1
            return
        self.builder = factory(self.bounds, self.layers)

    def _commit(self):
        if self.builder is not None:
            self.entities.append(self.builder.build())
            self.builder = None


def parse_dxf(text):
    """Parse DXF text into a Scene. Never raises on malformed input."""
    return DxfParser(text).parse()
