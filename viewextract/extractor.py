# viewextract/extractor.py
"""
Escape hatch from declarative widgets to the native views behind them.

``extract(widget, TextField, on_match)`` puts an invisible adjunct behind
``widget``. After every layout pass the adjunct queues a search on the main
queue; when it runs, it looks up its own window-space frame and asks the
locator for the first ``TextField`` in the window that intersects it::

    def style_field(field):
        field.secure = True

    password = extract(TextField(placeholder="Password"), TextField, style_field)

``on_match`` may be called on every pass, with the same native view each time
while the tree is unchanged. Pass ``deduplicate=True`` to skip a delivery
when the match is the view delivered last time.
"""
import logging
import weakref
from typing import Any, Callable, Optional

from .base import NativeContext, RepresentableWidget, Widget
from .config import Config
from .locator import ViewLocator
from .native import NativeTree, NativeView, TypeSpec, ViewTree
from .scheduler import MainQueue
from .widgets import Overlay

logger = logging.getLogger(__name__)

MatchCallback = Callable[[Any], None]


_NOTHING = object()


class _Delivery:
    """
    Remembers the last delivered match for de-duplication.

    Views are held weakly and compared by identity. Nodes that cannot be
    weakly referenced, such as integer handles into an arena, are kept as
    values and compared by equality.
    """

    def __init__(self):
        self._last_ref: Optional[weakref.ref] = None
        self._last_value: Any = _NOTHING

    def is_repeat(self, view: Any) -> bool:
        if self._last_ref is not None:
            return self._last_ref() is view
        return self._last_value is not _NOTHING and self._last_value == view

    def record(self, view: Any) -> None:
        try:
            self._last_ref = weakref.ref(view)
            self._last_value = _NOTHING
        except TypeError:
            self._last_ref = None
            self._last_value = view


class ViewExtractor(RepresentableWidget):
    """
    The invisible adjunct. Its native peer is a hidden, plain ``NativeView``
    that the host sizes to the wrapped widget.

    :param target_type: Native class, or a registered type tag.
    :param on_match: Called with each match, on the main queue.
    :param queue: Overrides the host's main queue.
    :param deduplicate: Skip repeat deliveries of the same view. Defaults
        to the ``extractor.deduplicate`` setting.
    :param tree: Native tree adapter; ``ViewTree`` by default.
    """

    def __init__(self, target_type: TypeSpec, on_match: MatchCallback, *,
                 queue: Optional[MainQueue] = None, deduplicate: Optional[bool] = None,
                 tree: Optional[NativeTree] = None):
        super().__init__()
        self.target_type = target_type
        self.on_match = on_match
        self.queue = queue
        if deduplicate is None:
            deduplicate = bool(Config().get_nested("extractor.deduplicate", False))
        self.deduplicate = deduplicate
        self.locator = ViewLocator(tree if tree is not None else ViewTree())
        self._delivery = _Delivery()

    def make_coordinator(self) -> _Delivery:
        return _Delivery()

    def make_native(self, context: NativeContext) -> NativeView:
        return NativeView(name="extractor", hidden=True)

    def update_native(self, view: NativeView, context: NativeContext) -> None:
        queue = self.queue if self.queue is not None else context.queue
        delivery = context.coordinator
        queue.submit(lambda: self.run_search(view, delivery))

    def run_search(self, view: Any, delivery: Optional[_Delivery] = None) -> Optional[Any]:
        """
        Searches from ``view``'s window for a match and delivers it.
        Runs on the main queue; does nothing if ``view`` is detached.

        :param delivery: Repeat-tracking state. Hosted adjuncts pass their
            coordinator; direct callers share one per extractor.
        """
        if delivery is None:
            delivery = self._delivery
        tree = self.locator.tree
        window = tree.window_of(view)
        if window is None:
            logger.debug("Extractor for %s skipped: adjunct is not attached to a window",
                         getattr(self.target_type, '__name__', self.target_type))
            return None

        region = tree.window_frame(view)
        match = self.locator.locate(window, self.target_type, region)
        if match is None:
            return None
        if self.deduplicate and delivery.is_repeat(match):
            logger.debug("Extractor skipped repeat delivery of %r", match)
            return match
        delivery.record(match)
        self.on_match(match)
        return match


def extract(widget: Widget, target_type: TypeSpec, on_match: MatchCallback, *,
            queue: Optional[MainQueue] = None, deduplicate: Optional[bool] = None,
            tree: Optional[NativeTree] = None) -> Widget:
    """
    Wraps ``widget`` with a ``ViewExtractor`` background.

    :return: An ``Overlay`` to use in place of ``widget``.
    """
    adjunct = ViewExtractor(target_type, on_match, queue=queue, deduplicate=deduplicate, tree=tree)
    return Overlay(child=widget, background=adjunct)
