# viewextract/widgets.py
"""
Declarative widgets understood by the host.

Each widget says three things about itself:

- ``native_class``: the native view it renders into, or None for purely
  structural widgets (``Padding``, ``Overlay``, ``Row``...) whose children
  attach to the nearest native ancestor;
- ``measure``: its size, given its children's sizes;
- ``child_rects``: where its children go, relative to its own origin.

Layout here is intentionally simple: fixed sizes, stacking and insets.
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

from .base import Key, Widget
from . import native
from .geometry import Offset, Rect

Size = Tuple[float, float]
Insets = Union[float, Tuple[float, float, float, float]]


class NativeWidget(Widget):
    """
    Base for widgets that the host lays out.

    :param name: Debug name copied onto the native view.
    """
    native_class: Optional[Type[native.NativeView]] = None

    def __init__(self, key: Optional[Key] = None, children: Optional[List[Widget]] = None,
                 name: Optional[str] = None):
        super().__init__(key=key, children=children)
        self.name = name

    def measure(self, child_sizes: Sequence[Size]) -> Size:
        if child_sizes:
            return child_sizes[0]
        return (0.0, 0.0)

    def child_rects(self, size: Size, child_sizes: Sequence[Size]) -> List[Rect]:
        return [Rect(0, 0, w, h) for (w, h) in child_sizes]

    def render_props(self) -> Dict[str, Any]:
        return {'name': self.name}

    def __repr__(self):
        return f"{self.__class__.__name__}(key={self.key}, name={self.name!r})"


class _FixedSizeWidget(NativeWidget):
    default_size: Size = (0.0, 0.0)

    def __init__(self, width: Optional[float] = None, height: Optional[float] = None,
                 key: Optional[Key] = None, children: Optional[List[Widget]] = None,
                 name: Optional[str] = None):
        super().__init__(key=key, children=children, name=name)
        self.width = width
        self.height = height

    def measure(self, child_sizes: Sequence[Size]) -> Size:
        fallback = child_sizes[0] if child_sizes else self.default_size
        return (
            self.width if self.width is not None else fallback[0],
            self.height if self.height is not None else fallback[1],
        )


class Container(_FixedSizeWidget):
    """A plain native box, optionally sized, holding at most one child."""
    native_class = native.NativeView

    def __init__(self, child: Optional[Widget] = None, width: Optional[float] = None,
                 height: Optional[float] = None, key: Optional[Key] = None, name: Optional[str] = None):
        super().__init__(width=width, height=height, key=key,
                         children=[child] if child else [], name=name)

    def child_rects(self, size: Size, child_sizes: Sequence[Size]) -> List[Rect]:
        return [Rect(0, 0, size[0], size[1]) for _ in child_sizes]


class ScrollView(_FixedSizeWidget):
    """
    A scrolling viewport. The child keeps its measured size and is shifted
    by ``content_offset``.
    """
    native_class = native.ScrollView

    def __init__(self, child: Optional[Widget] = None, width: Optional[float] = None,
                 height: Optional[float] = None, content_offset: Offset = Offset(),
                 key: Optional[Key] = None, name: Optional[str] = None):
        super().__init__(width=width, height=height, key=key,
                         children=[child] if child else [], name=name)
        self.content_offset = content_offset

    def render_props(self) -> Dict[str, Any]:
        props = super().render_props()
        props['content_offset'] = self.content_offset
        return props


class TextField(_FixedSizeWidget):
    native_class = native.TextField
    default_size = (200.0, 32.0)

    def __init__(self, text: str = "", placeholder: str = "", secure: bool = False,
                 width: Optional[float] = None, height: Optional[float] = None,
                 key: Optional[Key] = None, name: Optional[str] = None):
        super().__init__(width=width, height=height, key=key, name=name)
        self.text = text
        self.placeholder = placeholder
        self.secure = secure

    def render_props(self) -> Dict[str, Any]:
        props = super().render_props()
        props.update(text=self.text, placeholder=self.placeholder, secure=self.secure)
        return props


class Label(_FixedSizeWidget):
    native_class = native.Label
    default_size = (120.0, 20.0)

    def __init__(self, text: str = "", width: Optional[float] = None, height: Optional[float] = None,
                 key: Optional[Key] = None, name: Optional[str] = None):
        super().__init__(width=width, height=height, key=key, name=name)
        self.text = text

    def render_props(self) -> Dict[str, Any]:
        props = super().render_props()
        props['text'] = self.text
        return props


class Button(_FixedSizeWidget):
    native_class = native.Button
    default_size = (88.0, 36.0)

    def __init__(self, title: str = "", enabled: bool = True, width: Optional[float] = None,
                 height: Optional[float] = None, key: Optional[Key] = None, name: Optional[str] = None):
        super().__init__(width=width, height=height, key=key, name=name)
        self.title = title
        self.enabled = enabled

    def render_props(self) -> Dict[str, Any]:
        props = super().render_props()
        props.update(title=self.title, enabled=self.enabled)
        return props


class ImageView(_FixedSizeWidget):
    native_class = native.ImageView
    default_size = (64.0, 64.0)

    def __init__(self, source: Optional[str] = None, width: Optional[float] = None,
                 height: Optional[float] = None, key: Optional[Key] = None, name: Optional[str] = None):
        super().__init__(width=width, height=height, key=key, name=name)
        self.source = source

    def render_props(self) -> Dict[str, Any]:
        props = super().render_props()
        props['source'] = self.source
        return props


class Flex(NativeWidget):
    """
    Stacks children along ``axis`` ('horizontal' or 'vertical') with
    ``spacing`` between them. Renders into a native ``StackView``.
    """
    native_class = native.StackView

    def __init__(self, children: Optional[List[Widget]] = None, axis: str = 'vertical',
                 spacing: float = 0.0, key: Optional[Key] = None, name: Optional[str] = None):
        if axis not in ('horizontal', 'vertical'):
            raise ValueError(f"axis must be 'horizontal' or 'vertical', not {axis!r}")
        super().__init__(key=key, children=children, name=name)
        self.axis = axis
        self.spacing = spacing

    def measure(self, child_sizes: Sequence[Size]) -> Size:
        if not child_sizes:
            return (0.0, 0.0)
        gaps = self.spacing * (len(child_sizes) - 1)
        if self.axis == 'horizontal':
            return (sum(w for w, _ in child_sizes) + gaps, max(h for _, h in child_sizes))
        return (max(w for w, _ in child_sizes), sum(h for _, h in child_sizes) + gaps)

    def child_rects(self, size: Size, child_sizes: Sequence[Size]) -> List[Rect]:
        rects = []
        cursor = 0.0
        for w, h in child_sizes:
            if self.axis == 'horizontal':
                rects.append(Rect(cursor, 0, w, h))
                cursor += w + self.spacing
            else:
                rects.append(Rect(0, cursor, w, h))
                cursor += h + self.spacing
        return rects


class Row(Flex):
    def __init__(self, children: Optional[List[Widget]] = None, spacing: float = 0.0,
                 key: Optional[Key] = None, name: Optional[str] = None):
        super().__init__(children=children, axis='horizontal', spacing=spacing, key=key, name=name)


class Column(Flex):
    def __init__(self, children: Optional[List[Widget]] = None, spacing: float = 0.0,
                 key: Optional[Key] = None, name: Optional[str] = None):
        super().__init__(children=children, axis='vertical', spacing=spacing, key=key, name=name)


class Padding(NativeWidget):
    """Insets its child. A single number pads all four sides; a tuple is (left, top, right, bottom)."""

    def __init__(self, child: Widget, padding: Insets = 0.0, key: Optional[Key] = None):
        super().__init__(key=key, children=[child])
        if isinstance(padding, (int, float)):
            padding = (padding, padding, padding, padding)
        self.padding = tuple(float(p) for p in padding)

    def measure(self, child_sizes: Sequence[Size]) -> Size:
        left, top, right, bottom = self.padding
        w, h = child_sizes[0]
        return (w + left + right, h + top + bottom)

    def child_rects(self, size: Size, child_sizes: Sequence[Size]) -> List[Rect]:
        left, top, right, bottom = self.padding
        return [Rect(0, 0, size[0], size[1]).inset(left, top, right, bottom)]


class Overlay(NativeWidget):
    """
    Lays ``background`` out behind ``child`` with exactly the child's frame.
    The background's native views come first among their siblings.
    """

    def __init__(self, child: Widget, background: Widget, key: Optional[Key] = None):
        super().__init__(key=key, children=[background, child])

    @property
    def child(self) -> Widget:
        return self._children[1]

    @property
    def background(self) -> Widget:
        return self._children[0]

    def measure(self, child_sizes: Sequence[Size]) -> Size:
        return child_sizes[1]

    def child_rects(self, size: Size, child_sizes: Sequence[Size]) -> List[Rect]:
        full = Rect(0, 0, size[0], size[1])
        return [full, full]
