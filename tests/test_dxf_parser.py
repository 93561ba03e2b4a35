"""Tests for DxfParser: section gating, entity builders, bounds policy."""

import os
import sys
import unittest

_root = os.path.join(os.path.dirname(__file__), "..")
if _root not in sys.path:
    sys.path.insert(0, _root)

from dxfview import SceneModel  # noqa: E402
from dxfview.DxfParser import (  # noqa: E402
    DxfParser, aci_color, parse_dxf, to_float, to_int,
)
from dxfview.SceneModel import Extents  # noqa: E402


def dxf(*tags, section="ENTITIES", terminate=True):
    """DXF text with the given tags inside one section."""
    lines = ["0", "SECTION", "2", section]
    for code, value in tags:
        lines += [str(code), str(value)]
    if terminate:
        lines += ["0", "ENDSEC", "0", "EOF"]
    return "\n".join(lines) + "\n"


LINE_TAGS = [(0, "LINE"), (8, "Walls"),
             (10, 0), (20, 0), (11, 10), (21, 0)]


class TestNumbers(unittest.TestCase):

    def test_to_float(self):
        self.assertEqual(to_float("2.5"), 2.5)
        self.assertEqual(to_float("abc"), 0.0)
        self.assertEqual(to_float(""), 0.0)
        self.assertEqual(to_float("nan"), 0.0)
        self.assertEqual(to_float("1e999"), 0.0)

    def test_to_int(self):
        self.assertEqual(to_int("3"), 3)
        self.assertEqual(to_int("3.0"), 3)
        self.assertEqual(to_int("junk"), 0)

    def test_aci_color(self):
        self.assertEqual(aci_color("1"), "#EF4444")
        self.assertEqual(aci_color("5"), "#3B82F6")
        self.assertEqual(aci_color("9"), "#E5E7EB")
        self.assertIsNone(aci_color("256"))
        self.assertIsNone(aci_color("0"))
        self.assertIsNone(aci_color("junk"))


class TestLine(unittest.TestCase):

    def test_single_line(self):
        scene = parse_dxf(dxf(*LINE_TAGS))
        self.assertEqual(len(scene.entities), 1)
        line = scene.entities[0]
        self.assertIsInstance(line, SceneModel.Line)
        self.assertEqual((line.x1, line.y1, line.x2, line.y2),
                         (0.0, 0.0, 10.0, 0.0))
        self.assertEqual(line.layer, "Walls")
        self.assertIsNone(line.color)
        self.assertEqual(scene.extents, Extents(0.0, 0.0, 10.0, 0.0))

    def test_color(self):
        scene = parse_dxf(dxf(*LINE_TAGS, (62, 1)))
        self.assertEqual(scene.entities[0].color, "#EF4444")

    def test_garbage_coordinate_reads_zero(self):
        scene = parse_dxf(dxf((0, "LINE"), (10, "abc"), (20, 1),
                              (11, 4), (21, 5)))
        self.assertEqual(scene.entities[0].x1, 0.0)
        self.assertEqual(scene.extents, Extents(0.0, 1.0, 4.0, 5.0))

    def test_bounds_wait_for_end_y(self):
        """Without code 21 a line never reaches the bounds."""
        scene = parse_dxf(dxf((0, "LINE"), (10, 500), (20, 500),
                              (11, 600)))
        self.assertEqual(len(scene.entities), 1)
        self.assertEqual(scene.extents, Extents.placeholder())


class TestPolyline(unittest.TestCase):

    def test_closed_three_vertices(self):
        scene = parse_dxf(dxf((0, "LWPOLYLINE"), (8, "0"), (90, 3),
                              (70, 1),
                              (10, 0), (20, 0),
                              (10, 10), (20, 0),
                              (10, 10), (20, 5)))
        poly = scene.entities[0]
        self.assertEqual(poly.type, "LWPOLYLINE")
        self.assertEqual(poly.points, ((0.0, 0.0), (10.0, 0.0),
                                       (10.0, 5.0)))
        self.assertTrue(poly.closed)
        self.assertEqual(scene.extents, Extents(0.0, 0.0, 10.0, 5.0))

    def test_open_by_default(self):
        scene = parse_dxf(dxf((0, "LWPOLYLINE"), (10, 1), (20, 1),
                              (10, 2), (20, 2)))
        self.assertFalse(scene.entities[0].closed)

    def test_closed_flag_is_bit_zero(self):
        scene = parse_dxf(dxf((0, "LWPOLYLINE"), (70, 128)))
        self.assertFalse(scene.entities[0].closed)
        scene = parse_dxf(dxf((0, "LWPOLYLINE"), (70, 129)))
        self.assertTrue(scene.entities[0].closed)

    def test_y_without_x_pairs_with_zero(self):
        scene = parse_dxf(dxf((0, "LWPOLYLINE"), (20, 7)))
        self.assertEqual(scene.entities[0].points, ((0.0, 7.0),))


class TestCircleArc(unittest.TestCase):

    def test_circle_extents(self):
        scene = parse_dxf(dxf((0, "CIRCLE"), (10, 5), (20, 5), (40, 2)))
        circle = scene.entities[0]
        self.assertEqual((circle.cx, circle.cy, circle.r), (5.0, 5.0, 2.0))
        self.assertEqual(scene.extents, Extents(3.0, 3.0, 7.0, 7.0))

    def test_arc_fields(self):
        scene = parse_dxf(dxf((0, "ARC"), (10, 1), (20, 2), (40, 3),
                              (50, 45), (51, 270)))
        arc = scene.entities[0]
        self.assertEqual(arc.type, "ARC")
        self.assertEqual((arc.cx, arc.cy, arc.r), (1.0, 2.0, 3.0))
        self.assertEqual((arc.start_angle, arc.end_angle), (45.0, 270.0))

    def test_arc_excluded_from_bounds(self):
        scene = parse_dxf(dxf((0, "ARC"), (10, 500), (20, 500), (40, 50),
                              (50, 0), (51, 90)))
        self.assertEqual(scene.extents, Extents.placeholder())

        scene = parse_dxf(dxf((0, "ARC"), (10, 500), (20, 500), (40, 50),
                              *LINE_TAGS))
        self.assertEqual(scene.extents, Extents(0.0, 0.0, 10.0, 0.0))


class TestText(unittest.TestCase):

    def test_text_fields(self):
        scene = parse_dxf(dxf((0, "TEXT"), (10, 50), (20, 70), (40, 2.5),
                              (1, "Hello")))
        text = scene.entities[0]
        self.assertEqual(text.type, "TEXT")
        self.assertEqual((text.x, text.y, text.height), (50.0, 70.0, 2.5))
        self.assertEqual(text.content, "Hello")

    def test_mtext_kind(self):
        scene = parse_dxf(dxf((0, "MTEXT"), (1, "Note")))
        self.assertEqual(scene.entities[0].type, "MTEXT")

    def test_only_anchor_x_reaches_bounds(self):
        scene = parse_dxf(dxf((0, "TEXT"), (10, 50), (20, 70)))
        ext = scene.extents
        self.assertEqual((ext.min_x, ext.max_x), (50.0, 50.0))
        # Y was never touched and falls back to the placeholder
        self.assertEqual((ext.min_y, ext.max_y), (0.0, 100.0))


class TestSections(unittest.TestCase):

    def test_outside_entities_nothing_emitted(self):
        for section in ("HEADER", "TABLES", "BLOCKS", "OBJECTS"):
            scene = parse_dxf(dxf(*LINE_TAGS, section=section))
            self.assertEqual(scene.entities, ())
            self.assertEqual(scene.layers, ())
            self.assertEqual(scene.extents, Extents.placeholder())

    def test_blocks_then_entities(self):
        text = (dxf((0, "CIRCLE"), (10, 900), (20, 900), (40, 1),
                    section="BLOCKS")
                .replace("0\nEOF\n", "")
                + dxf(*LINE_TAGS))
        scene = parse_dxf(text)
        self.assertEqual([e.type for e in scene.entities], ["LINE"])
        self.assertEqual(scene.extents, Extents(0.0, 0.0, 10.0, 0.0))

    def test_tags_after_endsec_ignored(self):
        text = dxf(*LINE_TAGS) + "0\nCIRCLE\n10\n1\n20\n1\n40\n1\n"
        self.assertEqual(len(parse_dxf(text).entities), 1)


class TestStream(unittest.TestCase):

    def test_empty_text(self):
        scene = parse_dxf("")
        self.assertEqual(scene.entities, ())
        self.assertEqual(scene.extents, Extents(0.0, 0.0, 100.0, 100.0))

    def test_not_dxf(self):
        scene = parse_dxf("hello\nworld\nthis is not a drawing\n")
        self.assertTrue(scene.is_empty())
        self.assertEqual(scene.extents, Extents.placeholder())

    def test_empty_entities_section(self):
        scene = parse_dxf(dxf())
        self.assertTrue(scene.is_empty())
        self.assertEqual(scene.extents, Extents.placeholder())

    def test_last_entity_without_terminator(self):
        text = dxf((0, "CIRCLE"), (10, 1), (20, 1), (40, 1),
                   terminate=False)
        scene = parse_dxf(text)
        self.assertEqual(len(scene.entities), 1)
        self.assertEqual(scene.entities[0].type, "CIRCLE")

    def test_file_order_kept(self):
        scene = parse_dxf(dxf((0, "CIRCLE"), (40, 1),
                              *LINE_TAGS,
                              (0, "TEXT"), (1, "x")))
        self.assertEqual([e.type for e in scene.entities],
                         ["CIRCLE", "LINE", "TEXT"])

    def test_unsupported_entities_skipped(self):
        parser = DxfParser(dxf((0, "POINT"), (10, 900), (20, 900),
                               (8, "Hidden"),
                               *LINE_TAGS,
                               (0, "SPLINE"), (0, "POINT")))
        scene = parser.parse()
        self.assertEqual([e.type for e in scene.entities], ["LINE"])
        self.assertEqual(scene.layers, ("Walls",))
        self.assertEqual(parser.skipped, {"POINT": 2, "SPLINE": 1})
        self.assertEqual(scene.extents, Extents(0.0, 0.0, 10.0, 0.0))

    def test_crlf_and_padding(self):
        text = dxf(*LINE_TAGS).replace("\n", "\r\n")
        text = "\r\n".join("  " + ln for ln in text.split("\r\n"))
        scene = parse_dxf(text)
        self.assertEqual(len(scene.entities), 1)
        self.assertEqual(scene.entities[0].layer, "Walls")


class TestLayers(unittest.TestCase):

    def test_sorted_unique(self):
        scene = parse_dxf(dxf((0, "CIRCLE"), (8, "B"),
                              (0, "CIRCLE"), (8, "A"),
                              (0, "CIRCLE"), (8, "B")))
        self.assertEqual(scene.layers, ("A", "B"))

    def test_default_layer_not_registered(self):
        scene = parse_dxf(dxf((0, "CIRCLE"), (40, 1)))
        self.assertEqual(scene.entities[0].layer, "0")
        self.assertEqual(scene.layers, ())

    def test_on_layer_and_summary(self):
        scene = parse_dxf(dxf((0, "CIRCLE"), (8, "A"), (40, 1),
                              *LINE_TAGS))
        self.assertEqual(len(scene.on_layer("A")), 1)
        self.assertEqual(scene.summary(),
                         {"entities": 2, "width": 11, "height": 2})


if __name__ == "__main__":
    unittest.main()
