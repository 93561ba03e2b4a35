# PathGeometry - Toolkit-independent geometry helpers
#
# Arc math shared by EntityRenderer and the backends, and the
# background dot grid. All angles in the drawing are degrees,
# counter-clockwise from the positive X axis.
#
# Zero Qt dependencies.

import math

# Grid spacing in drawing units before scaling
GRID_SPACING = 20.0

# Chord angle used when an arc has to be approximated by segments
ARC_STEP_DEG = 5.0


def arc_point(cx, cy, r, angle_deg):
    """Cartesian point at angle_deg on the circle (cx, cy, r)."""
    rad = math.radians(angle_deg)
    return cx + r * math.cos(rad), cy + r * math.sin(rad)


def arc_span(start_angle, end_angle):
    """Counter-clockwise sweep from start to end, wrapped into [0, 360)."""
    diff = end_angle - start_angle
    if diff < 0:
        diff += 360.0
    return diff % 360.0


def large_arc_flag(start_angle, end_angle):
    """1 if the CCW sweep is more than half a turn, else 0."""
    return 1 if arc_span(start_angle, end_angle) > 180.0 else 0


def arc_endpoints(cx, cy, r, start_angle, end_angle):
    """Return the (start, end) Cartesian points of an arc."""
    return (arc_point(cx, cy, r, start_angle),
            arc_point(cx, cy, r, end_angle))


def sample_arc(cx, cy, r, start_angle, span, step=ARC_STEP_DEG):
    """Approximate a CCW arc with points every `step` degrees.

    Always includes both end points. A zero span gives the single
    start point twice so callers can still draw a (degenerate) segment.
    """
    n = max(1, int(math.ceil(span / step)))
    return [arc_point(cx, cy, r, start_angle + span * i / n)
            for i in range(n + 1)]


def generate_grid_dots(width, height, scale, pan_x, pan_y,
                       spacing=GRID_SPACING, max_dots=20000):
    """Screen positions of the background dot grid.

    The grid is anchored at the pan offset and its spacing follows the
    zoom, so it moves with the drawing.

    Args:
        width, height: Viewport size in pixels.
        scale: Current viewport scale.
        pan_x, pan_y: Current pan offset in pixels.
        spacing: Grid spacing before scaling.
        max_dots: Upper bound on the number of dots; returns [] when
                  the grid would be denser than that.

    Returns:
        List of (x, y) pixel positions.
    """
    step = spacing * scale
    if step <= 0:
        return []
    nx = int(width // step) + 2
    ny = int(height // step) + 2
    if nx * ny > max_dots:
        return []

    x0 = pan_x % step
    y0 = pan_y % step
    dots = []
    for j in range(ny):
        y = y0 + j * step
        if y > height:
            break
        for i in range(nx):
            x = x0 + i * step
            if x > width:
                break
            dots.append((x, y))
    return dots

