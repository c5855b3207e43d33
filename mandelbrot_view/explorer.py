"""
Tick-driven explorer core.

MandelbrotExplorer ties the view, controllers and renderer together.
Once per tick the front-end hands over every input event collected since
the previous tick; the explorer applies them and re-renders only if the
view or the buffer size changed.

Within a tick:
- Pointer positions are coalesced: only the last one is used for panning
- Button state is the state after the last button event
- The last resize wins and is applied before any view update
- Scroll events are applied one by one in arrival order
"""

import logging

from .events import ButtonChanged, PointerLeft, PointerMoved, PRIMARY_BUTTON, Resized, Scrolled
from .renderer import FrameRenderer
from .settings import Settings
from .view import PanController, ViewState, ZoomController


logger = logging.getLogger(__name__)


class MandelbrotExplorer:
    """
    Owns the view state and pixel buffer for one session.

    Usage:
        explorer = MandelbrotExplorer(Settings(width=800, height=600))
        explorer.tick([])  # first frame

        # In your event loop:
        if explorer.tick(events):
            display(explorer.buffer.tobytes(), explorer.buffer.size)
    """

    def __init__(self, settings=None, view=None):
        self.settings = settings or Settings()
        self.view = view or ViewState()
        self.renderer = FrameRenderer(
            self.settings.width, self.settings.height,
            max_iter=self.settings.max_iterations,
            palette_name=self.settings.palette,
        )
        self.pan = PanController()
        self.zoom = ZoomController(
            sensitivity=self.settings.zoom_sensitivity,
            min_scale=self.settings.min_scale,
            max_scale=self.settings.max_scale,
        )

        # Input state carried across ticks
        self.cursor = None
        self.primary_held = False

    @property
    def buffer(self):
        return self.renderer.buffer

    @property
    def width(self):
        return self.renderer.width

    @property
    def height(self):
        return self.renderer.height

    def reset_view(self):
        self.view.reset()

    def tick(self, events):
        """
        Apply a batch of input events and re-render if needed.

        Args:
            events: Iterable of events from events.py, oldest first

        Returns:
            True if the buffer was re-rendered and should be displayed
        """
        latest_position = None
        resize = None
        scrolls = []

        for event in events:
            if isinstance(event, PointerMoved):
                latest_position = (event.x, event.y)
                self.cursor = latest_position
            elif isinstance(event, PointerLeft):
                self.cursor = None
            elif isinstance(event, ButtonChanged):
                if event.button == PRIMARY_BUTTON:
                    self.primary_held = event.pressed
            elif isinstance(event, Scrolled):
                # Keep the cursor as of this event; it may move later in the tick
                scrolls.append((event.delta_y, self.cursor))
            elif isinstance(event, Resized):
                resize = (event.width, event.height)
            else:
                logger.debug("Ignoring unknown event %r", event)

        if resize is not None:
            self.renderer.resize(*resize)

        self.pan.update(self.view, self.primary_held, latest_position, self.width)

        for delta_y, cursor in scrolls:
            self.zoom.apply(self.view, delta_y, cursor, self.width, self.height)

        return self.renderer.render_if_needed(self.view)
