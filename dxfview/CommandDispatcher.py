# CommandDispatcher - Toolkit-independent command routing
#
# Maps the viewer's toolbar and menu command names onto ViewSession
# operations, so the Qt actions and any scripted caller share one
# code path. Each command returns a status line for the UI.

from dxfview import ViewTransform


class ViewCommands:
    """Routes viewer commands to a ViewSession.

    Commands (case-insensitive):
        ZOOMIN, ZOOMOUT     step the zoom by ViewTransform.ZOOM_STEP
        FIT, RESET          fit the drawing to the window again
        PAN, SELECT         choose the active tool
        GRID                toggle the background grid
        LAYER <id>          toggle one layer
        SHOWALL, HIDEALL    show or hide every layer
    """

    def __init__(self, session, zoom_step=ViewTransform.ZOOM_STEP):
        """
        Args:
            session: The ViewSession to act on.
            zoom_step: Factor used by ZOOMIN / ZOOMOUT.
        """
        self.session = session
        self.zoom_step = zoom_step

    def execute(self, cmd, *args):
        """Run one command.

        Args:
            cmd: Command name.
            *args: Command arguments (LAYER takes the layer id).

        Returns:
            str: Status message describing the outcome.
        """
        session = self.session
        viewport = session.viewport
        cmd = cmd.upper()

        if cmd == "ZOOMIN":
            scale = session.zoom(self.zoom_step)
            return f"Zoom {scale:g}"
        elif cmd == "ZOOMOUT":
            scale = session.zoom(1.0 / self.zoom_step)
            return f"Zoom {scale:g}"
        elif cmd in ("FIT", "RESET"):
            session.reset_view()
            return f"Zoom {viewport.scale:g}"
        elif cmd in ViewTransform.TOOLS:
            viewport.set_tool(cmd)
            session.notify_view_changed()
            return f"Tool {cmd}"
        elif cmd == "GRID":
            shown = session.toggle_grid()
            return "Grid on" if shown else "Grid off"
        elif cmd == "LAYER":
            if not args:
                return "LAYER needs a layer name"
            layer_id = " ".join(str(a) for a in args)
            visible = session.toggle_layer(layer_id)
            if visible is None:
                return f"No layer {layer_id}"
            return f"Layer {layer_id} {'shown' if visible else 'hidden'}"
        elif cmd == "SHOWALL":
            session.set_all_visible(True)
            return "All layers shown"
        elif cmd == "HIDEALL":
            session.set_all_visible(False)
            return "All layers hidden"

        return f"Unknown command: {cmd}"
