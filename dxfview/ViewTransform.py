# ViewTransform - Toolkit-independent viewport math
#
# Maps drawing coordinates (DXF, Y up) to screen pixels (Y down)
# through a single affine transform:
#
#     screen = pan + data * (scale, -scale)
#
# The Viewport class owns scale, pan offset and the active tool. The
# module-level functions are the pure math it is built on.
#
# Zero Qt dependencies. Can be used by any rendering backend.

import logging

# Tools
TOOL_PAN = "PAN"
TOOL_SELECT = "SELECT"
TOOLS = (TOOL_PAN, TOOL_SELECT)

# Scale limits
MIN_SCALE = 0.01
MAX_SCALE = 1000.0

# Toolbar zoom step and mouse-wheel sensitivity per delta unit
ZOOM_STEP = 1.2
WHEEL_SENSITIVITY = 0.001


def clamp_scale(scale):
    """Clamp a scale factor into [MIN_SCALE, MAX_SCALE]."""
    return min(max(MIN_SCALE, scale), MAX_SCALE)


def wheel_factor(delta_y, sensitivity=WHEEL_SENSITIVITY):
    """Zoom factor for a wheel event; positive delta_y zooms out."""
    return 1.0 - delta_y * sensitivity


def compute_fit_transform(extents, width, height, padding=0):
    """Compute the scale and pan that fit extents into a container.

    Args:
        extents: SceneModel.Extents of the drawing.
        width: Container width in pixels.
        height: Container height in pixels.
        padding: Margin in pixels kept free on every side.

    Returns:
        Tuple (scale, pan_x, pan_y), or None when the data or the
        usable view area is degenerate.
    """
    data_w = extents.max_x - extents.min_x
    data_h = extents.max_y - extents.min_y
    if data_w == 0 or data_h == 0:
        return None

    view_w = width - padding * 2
    view_h = height - padding * 2
    if view_w <= 0 or view_h <= 0:
        return None

    scale = min(view_w / data_w, view_h / data_h)

    center_x, center_y = extents.center

    # The render transform flips Y with scale(s, -s), hence the "+"
    pan_x = width / 2.0 - center_x * scale
    pan_y = height / 2.0 + center_y * scale
    return scale, pan_x, pan_y


def data_to_screen(x, y, scale, pan_x, pan_y):
    return pan_x + x * scale, pan_y - y * scale


def screen_to_data(sx, sy, scale, pan_x, pan_y):
    return (sx - pan_x) / scale, (pan_y - sy) / scale


class Viewport:
    """Scale, pan offset and tool of one view session.

    Pan is in screen pixels. Panning only happens while a drag is in
    progress under the pan tool; zoom is always about the transform
    origin and does not follow the cursor.
    """

    def __init__(self):
        self.scale = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.tool = TOOL_PAN
        self.dragging = False
        self._drag_x = 0.0
        self._drag_y = 0.0
        self._extents = None
        self._size = None

    def __repr__(self):
        return (f"Viewport(scale={self.scale:g}, "
                f"pan=({self.pan_x:g}, {self.pan_y:g}), tool={self.tool})")

    # ------------------------------------------------------------------
    def reset_state(self):
        """Identity transform, as on every new file load."""
        self.scale = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.dragging = False

    def forget(self):
        """Drop the remembered extents (no scene loaded)."""
        self._extents = None

    def fit_to_screen(self, extents, width, height, padding=0):
        """Fit extents into a width x height container.

        The extents and container are remembered for reset(), even
        when the fit itself is skipped on degenerate data.

        Returns:
            True if scale and pan changed.
        """
        self._extents = extents
        self._size = (width, height, padding)
        fit = compute_fit_transform(extents, width, height, padding)
        if fit is None:
            logging.debug("fit skipped: degenerate extents %s in %sx%s",
                          tuple(extents), width, height)
            return False
        self.scale, self.pan_x, self.pan_y = fit
        return True

    def resize(self, width, height):
        """Remember a new container size for the next reset()."""
        padding = self._size[2] if self._size else 0
        self._size = (width, height, padding)

    def reset(self):
        """Fit the last known extents again, or go to identity."""
        if self._extents is None or self._size is None:
            self.reset_state()
            return
        width, height, padding = self._size
        self.fit_to_screen(self._extents, width, height, padding)

    # ------------------------------------------------------------------
    def zoom(self, factor):
        """Multiply the scale by factor, clamped to the scale limits."""
        self.scale = clamp_scale(self.scale * factor)
        return self.scale

    def zoom_in(self, step=ZOOM_STEP):
        return self.zoom(step)

    def zoom_out(self, step=ZOOM_STEP):
        return self.zoom(1.0 / step)

    def wheel(self, delta_y, sensitivity=WHEEL_SENSITIVITY):
        return self.zoom(wheel_factor(delta_y, sensitivity))

    # ------------------------------------------------------------------
    def set_tool(self, tool):
        if tool not in TOOLS:
            raise ValueError(f"unknown tool {tool!r}")
        self.tool = tool
        if tool != TOOL_PAN:
            self.dragging = False

    def begin_drag(self, x, y):
        """Start a drag gesture at screen point x, y.

        Returns:
            True if the pan tool is active and the drag started.
        """
        if self.tool != TOOL_PAN:
            return False
        self.dragging = True
        self._drag_x = x
        self._drag_y = y
        return True

    def drag_to(self, x, y):
        """Continue a drag; pans by the movement since the last point."""
        if not self.dragging:
            return False
        dx = x - self._drag_x
        dy = y - self._drag_y
        self._drag_x = x
        self._drag_y = y
        return self.pan(dx, dy)

    def end_drag(self):
        self.dragging = False

    def pan(self, dx, dy):
        """Shift the pan offset by dx, dy screen pixels.

        Has no effect unless a drag is in progress under the pan tool.
        """
        if not self.dragging or self.tool != TOOL_PAN:
            return False
        self.pan_x += dx
        self.pan_y += dy
        return True

    # ------------------------------------------------------------------
    def transform(self):
        """Affine (a, b, c, d, e, f) mapping data to screen coordinates.

        x' = a*x + c*y + e,  y' = b*x + d*y + f
        """
        return (self.scale, 0.0, 0.0, -self.scale, self.pan_x, self.pan_y)

    def svg_transform(self):
        """Affine for Y-down SVG markup: translate(pan) scale(s)."""
        return (self.scale, 0.0, 0.0, self.scale, self.pan_x, self.pan_y)

    def stroke_width(self):
        """Line width in data units that renders about one pixel wide."""
        return 1.0 / self.scale

    def to_screen(self, x, y):
        return data_to_screen(x, y, self.scale, self.pan_x, self.pan_y)

    def to_data(self, sx, sy):
        return screen_to_data(sx, sy, self.scale, self.pan_x, self.pan_y)
