"""Tests for ViewTransform: fit, zoom, pan gating, coordinate mapping."""

import os
import sys
import unittest

_root = os.path.join(os.path.dirname(__file__), "..")
if _root not in sys.path:
    sys.path.insert(0, _root)

from dxfview import ViewTransform  # noqa: E402
from dxfview.SceneModel import Extents  # noqa: E402
from dxfview.ViewTransform import (  # noqa: E402
    TOOL_PAN, TOOL_SELECT, Viewport, clamp_scale, compute_fit_transform,
    wheel_factor,
)

SQUARE = Extents(0.0, 0.0, 100.0, 100.0)


class TestComputeFit(unittest.TestCase):

    def test_square_into_400(self):
        scale, pan_x, pan_y = compute_fit_transform(SQUARE, 400, 400)
        self.assertEqual(scale, 4.0)
        self.assertEqual((pan_x, pan_y), (0.0, 400.0))

    def test_uniform_scale_uses_smaller_ratio(self):
        scale, _, _ = compute_fit_transform(SQUARE, 800, 400)
        self.assertEqual(scale, 4.0)

    def test_padding(self):
        scale, _, _ = compute_fit_transform(SQUARE, 500, 500, padding=50)
        self.assertEqual(scale, 4.0)

    def test_degenerate(self):
        self.assertIsNone(
            compute_fit_transform(Extents(0, 0, 10, 0), 400, 400))
        self.assertIsNone(
            compute_fit_transform(Extents(5, 0, 5, 10), 400, 400))
        self.assertIsNone(compute_fit_transform(SQUARE, 0, 0))
        self.assertIsNone(compute_fit_transform(SQUARE, 80, 80, padding=40))


class TestHelpers(unittest.TestCase):

    def test_clamp(self):
        self.assertEqual(clamp_scale(1e9), ViewTransform.MAX_SCALE)
        self.assertEqual(clamp_scale(1e-9), ViewTransform.MIN_SCALE)
        self.assertEqual(clamp_scale(3.0), 3.0)

    def test_wheel_factor(self):
        self.assertAlmostEqual(wheel_factor(100), 0.9)
        self.assertAlmostEqual(wheel_factor(-100), 1.1)


class TestViewport(unittest.TestCase):

    def setUp(self):
        self.vp = Viewport()

    def test_initial_identity(self):
        self.assertEqual(self.vp.transform(), (1.0, 0.0, 0.0, -1.0, 0.0, 0.0))
        self.assertEqual(self.vp.tool, TOOL_PAN)

    def test_fit_centers_content(self):
        self.assertTrue(self.vp.fit_to_screen(SQUARE, 400, 400))
        self.assertEqual(self.vp.scale, 4.0)
        self.assertEqual(self.vp.to_screen(50, 50), (200.0, 200.0))
        # Y is flipped: the drawing's top edge is at the screen top
        self.assertEqual(self.vp.to_screen(0, 100), (0.0, 0.0))

    def test_fit_degenerate_keeps_state(self):
        self.vp.scale = 2.5
        self.vp.pan_x = 7.0
        self.assertFalse(
            self.vp.fit_to_screen(Extents(0, 0, 10, 0), 400, 400))
        self.assertEqual((self.vp.scale, self.vp.pan_x), (2.5, 7.0))

    def test_zoom_inverse(self):
        for f in (1.2, 0.5, 3.0, 10.0, 0.013):
            self.vp.scale = 2.0
            self.vp.zoom(f)
            self.vp.zoom(1.0 / f)
            self.assertAlmostEqual(self.vp.scale, 2.0)

    def test_zoom_clamped(self):
        self.assertEqual(self.vp.zoom(1e6), 1000.0)
        self.assertEqual(self.vp.zoom(1e-9), 0.01)

    def test_zoom_keeps_pan(self):
        self.vp.fit_to_screen(SQUARE, 400, 400)
        self.vp.zoom_in()
        self.assertAlmostEqual(self.vp.scale, 4.8)
        self.assertEqual((self.vp.pan_x, self.vp.pan_y), (0.0, 400.0))
        self.vp.zoom_out()
        self.assertAlmostEqual(self.vp.scale, 4.0)

    def test_wheel(self):
        self.vp.wheel(-100)
        self.assertAlmostEqual(self.vp.scale, 1.1)

    def test_pan_needs_drag(self):
        self.assertFalse(self.vp.pan(5, 5))
        self.assertEqual((self.vp.pan_x, self.vp.pan_y), (0.0, 0.0))

    def test_drag_pans(self):
        self.assertTrue(self.vp.begin_drag(10, 10))
        self.assertTrue(self.vp.drag_to(15, 20))
        self.assertTrue(self.vp.drag_to(16, 20))
        self.assertEqual((self.vp.pan_x, self.vp.pan_y), (6.0, 10.0))
        self.vp.end_drag()
        self.assertFalse(self.vp.drag_to(100, 100))
        self.assertEqual((self.vp.pan_x, self.vp.pan_y), (6.0, 10.0))

    def test_select_tool_does_not_pan(self):
        self.vp.set_tool(TOOL_SELECT)
        self.assertFalse(self.vp.begin_drag(0, 0))
        self.assertFalse(self.vp.drag_to(50, 50))
        self.assertEqual((self.vp.pan_x, self.vp.pan_y), (0.0, 0.0))

    def test_switching_tool_ends_drag(self):
        self.vp.begin_drag(0, 0)
        self.vp.set_tool(TOOL_SELECT)
        self.assertFalse(self.vp.dragging)

    def test_unknown_tool(self):
        with self.assertRaises(ValueError):
            self.vp.set_tool("ROTATE")

    def test_reset_refits(self):
        self.vp.fit_to_screen(SQUARE, 400, 400)
        self.vp.zoom(3)
        self.vp.reset()
        self.assertEqual(self.vp.scale, 4.0)

    def test_reset_after_resize(self):
        self.vp.fit_to_screen(SQUARE, 400, 400)
        self.vp.resize(800, 800)
        self.vp.reset()
        self.assertEqual(self.vp.scale, 8.0)

    def test_reset_without_scene(self):
        self.vp.zoom(3)
        self.vp.reset()
        self.assertEqual(self.vp.transform(), (1.0, 0.0, 0.0, -1.0, 0.0, 0.0))

    def test_transform_and_stroke(self):
        self.vp.fit_to_screen(SQUARE, 400, 400)
        self.assertEqual(self.vp.transform(),
                         (4.0, 0.0, 0.0, -4.0, 0.0, 400.0))
        self.assertEqual(self.vp.stroke_width(), 0.25)
        self.assertEqual(self.vp.svg_transform(),
                         (4.0, 0.0, 0.0, 4.0, 0.0, 400.0))

    def test_to_data_inverts_to_screen(self):
        self.vp.fit_to_screen(Extents(-30, 10, 70, 60), 640, 480)
        sx, sy = self.vp.to_screen(12.5, -3.0)
        x, y = self.vp.to_data(sx, sy)
        self.assertAlmostEqual(x, 12.5)
        self.assertAlmostEqual(y, -3.0)


if __name__ == "__main__":
    unittest.main()
