# SceneModel - Immutable result of parsing a drawing
#
# Entities are small immutable records, one class per supported DXF
# entity. A Scene bundles the ordered entities, the sorted layer names
# and the drawing extents. Nothing here is mutated after the parser
# hands it over; layer visibility lives in ViewSession.

from collections import namedtuple

DEFAULT_LAYER = "0"

# Extents substituted when no entity contributed to the bounds
PLACEHOLDER = (0.0, 0.0, 100.0, 100.0)


class Extents(namedtuple("Extents", "min_x min_y max_x max_y")):
    """Axis-aligned bounding box of the drawing (DXF units, Y up)."""

    __slots__ = ()

    @property
    def width(self):
        return self.max_x - self.min_x

    @property
    def height(self):
        return self.max_y - self.min_y

    @property
    def center(self):
        return (self.min_x + self.width / 2.0,
                self.min_y + self.height / 2.0)

    @classmethod
    def placeholder(cls):
        return cls(*PLACEHOLDER)


class Line(namedtuple("Line", "x1 y1 x2 y2 layer color")):
    __slots__ = ()
    type = "LINE"


class Polyline(namedtuple("Polyline", "points closed layer color")):
    """Lightweight polyline; points is a tuple of (x, y) tuples."""

    __slots__ = ()
    type = "LWPOLYLINE"


class Circle(namedtuple("Circle", "cx cy r layer color")):
    __slots__ = ()
    type = "CIRCLE"


class Arc(namedtuple("Arc", "cx cy r start_angle end_angle layer color")):
    """Circular arc; angles in degrees, counter-clockwise from +X."""

    __slots__ = ()
    type = "ARC"


class Text(namedtuple("Text", "x y height content layer color kind")):
    """Single-line (TEXT) or multi-line (MTEXT) text anchored at x, y."""

    __slots__ = ()

    @property
    def type(self):
        return self.kind


ENTITY_TYPES = ("LINE", "LWPOLYLINE", "CIRCLE", "ARC", "TEXT", "MTEXT")


class Scene:
    """Parsed drawing: entities, layer names and extents.

    Attributes are read-only; the containers are tuples.
    """

    __slots__ = ("_entities", "_layers", "_extents")

    def __init__(self, entities=(), layers=(), extents=None):
        self._entities = tuple(entities)
        self._layers = tuple(sorted(set(layers)))
        self._extents = extents if extents is not None \
            else Extents.placeholder()

    @property
    def entities(self):
        return self._entities

    @property
    def layers(self):
        return self._layers

    @property
    def extents(self):
        return self._extents

    def __len__(self):
        return len(self._entities)

    def __repr__(self):
        return (f"Scene({len(self._entities)} entities, "
                f"{len(self._layers)} layers, {tuple(self._extents)})")

    def is_empty(self):
        return not self._entities

    def on_layer(self, name):
        """Return the entities drawn on the given layer, in file order."""
        return [e for e in self._entities if e.layer == name]

    def summary(self):
        """Entity count and rounded drawing size for status displays."""
        return {
            "entities": len(self._entities),
            "width": round(self._extents.width),
            "height": round(self._extents.height),
        }


class SvgScene:
    """An SVG document passed through untouched to the renderer."""

    __slots__ = ("_markup",)

    def __init__(self, markup):
        self._markup = markup

    @property
    def markup(self):
        return self._markup

    def __repr__(self):
        return f"SvgScene({len(self._markup)} chars)"
