# viewextract/native.py
"""
The native view layer.

Declarative widgets describe UI; native views are the concrete objects they
render into. This module provides a small in-memory native view hierarchy
(``NativeView`` and its kinds, rooted at a ``Window``) together with the
``NativeTree`` adapter protocol the locator uses to walk *any* native tree
without owning or mutating it.

Every ``NativeView`` subclass registers a type tag (its class name unless it
passes ``tag=...``), so callers that only have a string, such as the CLI, can
still name the type they are looking for.
"""
import logging
import weakref
from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple, Union

from .exceptions import TreeFormatError, UnknownNativeType
from .geometry import Offset, Rect

logger = logging.getLogger(__name__)

TypeSpec = Union[type, str]


class NativeTypeRegistry:
    """Maps type tags to native view classes."""

    def __init__(self):
        self._types: Dict[str, type] = {}

    def register(self, cls: type, tag: Optional[str] = None) -> str:
        tag = tag or cls.__name__
        existing = self._types.get(tag)
        if existing is not None and existing is not cls:
            logger.debug("Type tag %r re-bound from %s to %s", tag, existing, cls)
        self._types[tag] = cls
        return tag

    def resolve(self, target: TypeSpec) -> type:
        """
        Returns the class for ``target``.

        :param target: A class (returned unchanged) or a registered tag.
        :raises UnknownNativeType: if a tag string is not registered.
        """
        if isinstance(target, type):
            return target
        try:
            return self._types[target]
        except KeyError:
            raise UnknownNativeType(
                f"No native view type registered under {target!r}",
                context={"known": sorted(self._types)},
            ) from None

    def tags(self) -> List[str]:
        return sorted(self._types)

    def __contains__(self, tag: str) -> bool:
        return tag in self._types


registry = NativeTypeRegistry()


class NativeView:
    """
    A concrete, framework-owned view.

    :param frame: Position and size in the superview's coordinate space.
    :param name: Optional debug name, shown by ``describe_path`` and the CLI.
    :param hidden: Hidden views still take part in searches; the flag is
        informational, like an invisible adjunct.
    """
    type_tag: str = "NativeView"

    def __init_subclass__(cls, tag: Optional[str] = None, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.type_tag = registry.register(cls, tag)

    def __init__(self, frame: Optional[Rect] = None, name: Optional[str] = None, hidden: bool = False):
        self.frame: Rect = frame or Rect()
        self.bounds_origin: Offset = Offset()
        self.name = name
        self.hidden = hidden
        self._subviews: List['NativeView'] = []
        self._superview_ref: Optional[weakref.ref] = None

    # --- Hierarchy ---
    @property
    def subviews(self) -> Tuple['NativeView', ...]:
        return tuple(self._subviews)

    @property
    def superview(self) -> Optional['NativeView']:
        return self._superview_ref() if self._superview_ref else None

    def add_subview(self, view: 'NativeView') -> None:
        self.insert_subview(view, len(self._subviews))

    def insert_subview(self, view: 'NativeView', index: int) -> None:
        if view is self:
            raise ValueError("A view cannot be its own subview")
        if view.superview is not None:
            view.remove_from_superview()
        self._subviews.insert(index, view)
        view._superview_ref = weakref.ref(self)

    def remove_from_superview(self) -> None:
        parent = self.superview
        if parent is not None:
            parent._subviews.remove(self)
        self._superview_ref = None

    @property
    def root(self) -> 'NativeView':
        view = self
        while view.superview is not None:
            view = view.superview
        return view

    @property
    def window(self) -> Optional['Window']:
        """The window this view is attached to, or None if detached."""
        root = self.root
        return root if isinstance(root, Window) else None

    # --- Geometry ---
    @property
    def bounds(self) -> Rect:
        return Rect(self.bounds_origin.dx, self.bounds_origin.dy, self.frame.width, self.frame.height)

    def convert_to_root(self, rect: Rect) -> Rect:
        """Converts ``rect`` from this view's bounds space to its root's."""
        view = self
        while True:
            parent = view.superview
            if parent is None:
                return rect
            rect = rect.translate(view.frame.origin - view.bounds_origin)
            view = parent

    def window_frame(self) -> Rect:
        return self.convert_to_root(self.bounds)

    def __repr__(self):
        label = f" {self.name!r}" if self.name else ""
        return f"{self.type_tag}{label} frame={self.frame}"


registry.register(NativeView)


class Window(NativeView):
    """The root native container. Views under a Window are attached."""


class StackView(NativeView):
    pass


class ScrollView(NativeView):
    """A view whose subviews are shifted by ``content_offset``."""

    @property
    def content_offset(self) -> Offset:
        return self.bounds_origin

    @content_offset.setter
    def content_offset(self, value: Offset) -> None:
        self.bounds_origin = value

    scroll_enabled: bool = True


class TextField(NativeView):
    text: str = ""
    placeholder: str = ""
    secure: bool = False


class Label(NativeView):
    text: str = ""


class Button(NativeView):
    title: str = ""
    enabled: bool = True


class ImageView(NativeView):
    source: Optional[str] = None


# --- Tree adapters ---
class NativeTree(Protocol):
    """
    Read-only access to a native hierarchy.

    Implementations never take ownership of nodes; they only report type,
    children and geometry at the moment they are asked.
    """

    def children(self, node: Any) -> Sequence[Any]: ...

    def is_instance(self, node: Any, target_type: TypeSpec) -> bool: ...

    def window_frame(self, node: Any) -> Rect: ...

    def window_of(self, node: Any) -> Optional[Any]: ...


class ViewTree:
    """``NativeTree`` adapter for ``NativeView`` hierarchies."""

    def __init__(self, types: NativeTypeRegistry = registry):
        self.types = types

    def children(self, node: NativeView) -> Sequence[NativeView]:
        return node.subviews

    def is_instance(self, node: NativeView, target_type: TypeSpec) -> bool:
        return isinstance(node, self.types.resolve(target_type))

    def window_frame(self, node: NativeView) -> Rect:
        return node.window_frame()

    def window_of(self, node: NativeView) -> Optional[Window]:
        return node.window


# --- Serialized trees ---
def _rect_from(value: Any, where: str) -> Rect:
    if value is None:
        return Rect()
    if isinstance(value, str):
        try:
            return Rect.parse(value)
        except ValueError as e:
            raise TreeFormatError(f"{where}: {e}") from e
    if isinstance(value, (list, tuple)) and len(value) == 4:
        return Rect(*(float(v) for v in value))
    if isinstance(value, dict):
        return Rect(float(value.get('x', 0)), float(value.get('y', 0)),
                    float(value.get('width', 0)), float(value.get('height', 0)))
    raise TreeFormatError(f"{where}: cannot read a rectangle from {value!r}")


def view_from_dict(data: Dict[str, Any], types: NativeTypeRegistry = registry, _where: str = "root") -> NativeView:
    """
    Builds a native view tree from a nested dict.

    Each node looks like::

        {"type": "ScrollView", "name": "feed", "frame": [0, 0, 320, 480],
         "content_offset": [0, 40], "children": [...]}
    """
    if not isinstance(data, dict):
        raise TreeFormatError(f"{_where}: expected a mapping, got {type(data).__name__}")
    tag = data.get('type', 'NativeView')
    try:
        cls = types.resolve(tag)
    except UnknownNativeType as e:
        raise TreeFormatError(f"{_where}: {e.message}", context=e.context) from e

    view = cls(frame=_rect_from(data.get('frame'), _where), name=data.get('name'),
               hidden=bool(data.get('hidden', False)))
    offset = data.get('content_offset')
    if offset is not None:
        if not (isinstance(offset, (list, tuple)) and len(offset) == 2):
            raise TreeFormatError(f"{_where}: content_offset must be [dx, dy]")
        view.bounds_origin = Offset(float(offset[0]), float(offset[1]))

    children = data.get('children') or []
    if not isinstance(children, list):
        raise TreeFormatError(f"{_where}: children must be a list")
    for i, child in enumerate(children):
        view.add_subview(view_from_dict(child, types, f"{_where}.children[{i}]"))
    return view


def walk(view: NativeView, depth: int = 0) -> Iterator[Tuple[int, NativeView]]:
    """Yields ``(depth, view)`` pairs in pre-order."""
    yield depth, view
    for child in view.subviews:
        yield from walk(child, depth + 1)


def describe_path(view: NativeView) -> str:
    """A slash-separated path from the root, e.g. ``Window/StackView[1]/TextField'email'``."""
    parts = []
    node = view
    while node is not None:
        parent = node.superview
        label = node.type_tag
        if parent is not None:
            label += f"[{parent.subviews.index(node)}]"
        if node.name:
            label += f"{node.name!r}"
        parts.append(label)
        node = parent
    return "/".join(reversed(parts))
