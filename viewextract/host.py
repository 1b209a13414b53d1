# viewextract/host.py
"""
A minimal declarative host.

The host owns a native ``Window`` and keeps it in sync with a declarative
widget tree:

1. **Rebuild**: call ``build()`` on stateless widgets again.
2. **Reconcile**: match new widgets against the previous element tree.
   An element is kept (and its native view reused) when the widget at that
   position has the same type and key; otherwise it is replaced. Keyed
   children are matched by key, unkeyed ones by order.
3. **Layout**: measure bottom-up, place top-down, then make every native
   view's subviews match the element order.
4. **Notify**: call ``update_native`` on every representable widget, in
   tree order, now that native frames are final.

It is just enough of a framework to host adjunct widgets; it is not a
layout engine.
"""
import logging
import time
from typing import Iterator, List, Optional, Sequence, Tuple

from .base import Key, NativeContext, RepresentableWidget, StatelessWidget, Widget
from .exceptions import HostError
from .geometry import Rect
from .native import NativeView, Window
from .scheduler import MainQueue, get_main_queue
from .widgets import NativeWidget

logger = logging.getLogger(__name__)

Size = Tuple[float, float]


def can_update(old: Widget, new: Widget) -> bool:
    return type(old) is type(new) and old.key == new.key


def sync_subviews(parent: NativeView, desired: Sequence[NativeView]) -> None:
    """Reorders ``parent``'s subviews to ``desired``, moving only what is out of place."""
    for index, view in enumerate(desired):
        current = parent.subviews
        if index >= len(current) or current[index] is not view:
            parent.insert_subview(view, index)
    for extra in parent.subviews[len(desired):]:
        extra.remove_from_superview()


class Element:
    """A mounted widget: its place in the tree and, if any, its native view."""

    def __init__(self, widget: Widget, host: 'Host'):
        self.widget = widget
        self.host = host
        self.children: List['Element'] = []
        self.native_view: Optional[NativeView] = None
        self.rect = Rect()

    # --- lifecycle ---
    def mount(self) -> None:
        raise NotImplementedError

    def update(self, widget: Widget) -> None:
        raise NotImplementedError

    def unmount(self) -> None:
        for child in self.children:
            child.unmount()
        self.children = []
        if self.native_view is not None:
            self.native_view.remove_from_superview()

    # --- layout ---
    def measure(self) -> Size:
        raise NotImplementedError

    def place(self, rect: Rect) -> None:
        self.rect = rect
        if self.native_view is not None:
            self.native_view.frame = rect

    def native_tops(self) -> List[NativeView]:
        """The native views this element contributes to its native parent."""
        if self.native_view is not None:
            return [self.native_view]
        tops: List[NativeView] = []
        for child in self.children:
            tops.extend(child.native_tops())
        return tops

    def sync(self) -> None:
        if self.native_view is not None:
            desired: List[NativeView] = []
            for child in self.children:
                desired.extend(child.native_tops())
            sync_subviews(self.native_view, desired)
        for child in self.children:
            child.sync()

    def walk(self) -> Iterator['Element']:
        yield self
        for child in self.children:
            yield from child.walk()

    def _update_children(self, new_widgets: Sequence[Widget]) -> None:
        old_by_key = {c.widget.key: c for c in self.children if c.widget.key is not None}
        old_unkeyed = [c for c in self.children if c.widget.key is None]
        updated: List[Element] = []
        for widget in new_widgets:
            if widget.key is not None:
                candidate = old_by_key.pop(widget.key, None)
            else:
                candidate = old_unkeyed.pop(0) if old_unkeyed else None
            if candidate is not None and can_update(candidate.widget, widget):
                candidate.update(widget)
                updated.append(candidate)
            else:
                if candidate is not None:
                    candidate.unmount()
                updated.append(self.host.inflate(widget))
        for leftover in list(old_by_key.values()) + old_unkeyed:
            leftover.unmount()
        self.children = updated

    def __repr__(self):
        return f"{self.__class__.__name__}({self.widget!r})"


class ComponentElement(Element):
    """Hosts a ``StatelessWidget``; owns no native view."""

    def mount(self) -> None:
        self.children = [self.host.inflate(self._build())]

    def update(self, widget: Widget) -> None:
        self.widget = widget
        self._update_children([self._build()])

    def _build(self) -> Widget:
        built = self.widget.build()
        if not isinstance(built, Widget):
            raise HostError(f"{type(self.widget).__name__}.build() returned {built!r}, not a Widget")
        return built

    def measure(self) -> Size:
        return self.children[0].measure()

    def place(self, rect: Rect) -> None:
        super().place(rect)
        self.children[0].place(rect)


class LayoutElement(Element):
    """Hosts a ``NativeWidget``, creating its native view if it has one."""

    def __init__(self, widget: NativeWidget, host: 'Host'):
        super().__init__(widget, host)
        self._child_sizes: List[Size] = []

    def mount(self) -> None:
        if self.widget.native_class is not None:
            self.native_view = self.widget.native_class()
            self._configure()
        self.children = [self.host.inflate(w) for w in self.widget.get_children()]

    def update(self, widget: Widget) -> None:
        self.widget = widget
        self._configure()
        self._update_children(widget.get_children())

    def _configure(self) -> None:
        if self.native_view is None:
            return
        for prop, value in self.widget.render_props().items():
            if prop == 'content_offset':
                self.native_view.bounds_origin = value
            else:
                setattr(self.native_view, prop, value)

    def measure(self) -> Size:
        self._child_sizes = [child.measure() for child in self.children]
        return self.widget.measure(self._child_sizes)

    def place(self, rect: Rect) -> None:
        super().place(rect)
        # Children of a native view are placed in its own space; otherwise in our parent's.
        base = Rect(0, 0, rect.width, rect.height) if self.native_view is not None else rect
        rects = self.widget.child_rects((rect.width, rect.height), self._child_sizes)
        for child, child_rect in zip(self.children, rects):
            child.place(child_rect.translate(base.origin))


class RepresentableElement(Element):
    """Hosts a ``RepresentableWidget`` and drives its native hooks."""

    def mount(self) -> None:
        self.context = NativeContext(self.host, self.widget.make_coordinator())
        self.native_view = self.widget.make_native(self.context)

    def update(self, widget: Widget) -> None:
        self.widget = widget

    def unmount(self) -> None:
        view = self.native_view
        super().unmount()
        if view is not None:
            self.widget.dismantle_native(view)

    def measure(self) -> Size:
        return self.widget.intrinsic_size() or (0.0, 0.0)

    def notify(self) -> None:
        self.widget.update_native(self.native_view, self.context)


class Host:
    """
    Mounts a widget tree into a native window and runs layout passes.

    :param window: Native root. A fresh ``Window`` of ``size`` if omitted.
    :param queue: Main queue for deferred work; defaults to the process-wide one.
    :param size: Size of the window created when ``window`` is omitted.
    """

    def __init__(self, window: Optional[Window] = None, queue: Optional[MainQueue] = None,
                 size: Size = (800.0, 600.0)):
        self.window = window if window is not None else Window(frame=Rect(0, 0, *size), name="main")
        self.queue = queue if queue is not None else get_main_queue()
        self.pass_count = 0
        self._root_widget: Optional[Widget] = None
        self._root_element: Optional[Element] = None
        self._layout_requested = False

    @property
    def root_element(self) -> Optional[Element]:
        return self._root_element

    def inflate(self, widget: Widget) -> Element:
        if isinstance(widget, StatelessWidget):
            element: Element = ComponentElement(widget, self)
        elif isinstance(widget, RepresentableWidget):
            element = RepresentableElement(widget, self)
        elif isinstance(widget, NativeWidget):
            element = LayoutElement(widget, self)
        else:
            raise HostError(f"Don't know how to host {type(widget).__name__}")
        element.mount()
        return element

    def mount(self, root: Widget, layout: bool = True) -> None:
        """Sets the root widget and, by default, runs the first layout pass."""
        self._root_widget = root
        if layout:
            self.layout()

    def set_root(self, root: Widget) -> None:
        """Replaces the root widget and schedules a layout pass."""
        self._root_widget = root
        self.request_layout()

    def layout(self) -> None:
        """Runs one synchronous rebuild, reconcile, layout and notify pass."""
        if self._root_widget is None:
            raise HostError("Host.layout() called before a root widget was mounted")
        start = time.perf_counter()

        root = self._root_element
        if root is not None and can_update(root.widget, self._root_widget):
            root.update(self._root_widget)
        else:
            if root is not None:
                root.unmount()
            root = self._root_element = self.inflate(self._root_widget)

        width, height = root.measure()
        root.place(Rect(0, 0, width, height))
        sync_subviews(self.window, root.native_tops())
        root.sync()

        for element in root.walk():
            if isinstance(element, RepresentableElement):
                element.notify()

        self.pass_count += 1
        logger.debug("Layout pass %d finished in %.4fs", self.pass_count, time.perf_counter() - start)

    def request_layout(self) -> None:
        """Schedules a layout pass on the main queue. Repeated requests coalesce."""
        if not self._layout_requested:
            self._layout_requested = True
            self.queue.submit(self._process_layout)

    def _process_layout(self) -> None:
        self._layout_requested = False
        if self._root_widget is None:
            logger.debug("Layout request dropped: nothing mounted")
            return
        self.layout()

    def unmount(self) -> None:
        """Tears down the element tree; its native views leave the window."""
        if self._root_element is not None:
            self._root_element.unmount()
        self._root_element = None
        self._root_widget = None

    def native_view_for(self, key: Key) -> Optional[NativeView]:
        """Returns the native view of the element whose widget has ``key``."""
        if self._root_element is None:
            return None
        for element in self._root_element.walk():
            if element.widget.key == key:
                return element.native_view
        return None
