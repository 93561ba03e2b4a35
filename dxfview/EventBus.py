# EventBus - Toolkit-independent publish/subscribe
#
# Lets FileManager and ViewSession announce loads and view changes
# without knowing about the Qt widgets that react to them. The Qt
# front end forwards the events it cares about onto AppSignals.
#
# Events used by the viewer:
#   "load_started"     (filename)
#   "scene_loaded"     (filename, scene)
#   "svg_loaded"       (filename, svg_scene)
#   "load_failed"      (filename, error)
#   "layers_changed"   (layers)
#   "view_changed"     (viewport)
#   "status_message"   (message)

import threading
from collections import defaultdict


class EventBus:
    """Synchronous publish/subscribe dispatcher.

    Callbacks run on the emitting thread in subscription order. A
    callback subscribed twice to the same event is only called once.
    """

    def __init__(self):
        self._subscribers = defaultdict(list)
        self._lock = threading.Lock()

    def on(self, event_name, callback):
        """Subscribe callback(*args, **kwargs) to event_name."""
        with self._lock:
            if callback not in self._subscribers[event_name]:
                self._subscribers[event_name].append(callback)

    def off(self, event_name, callback):
        """Unsubscribe; unknown callbacks are ignored."""
        with self._lock:
            try:
                self._subscribers[event_name].remove(callback)
            except ValueError:
                pass

    def subscribers(self, event_name):
        with self._lock:
            return list(self._subscribers.get(event_name, ()))

    def emit(self, event_name, *args, **kwargs):
        """Call every subscriber of event_name with the given arguments."""
        for callback in self.subscribers(event_name):
            callback(*args, **kwargs)

    def clear(self, event_name=None):
        """Remove all subscribers, or only those of one event."""
        with self._lock:
            if event_name is None:
                self._subscribers.clear()
            else:
                self._subscribers.pop(event_name, None)


# Application-wide instance
bus = EventBus()
