# viewextract/geometry.py
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Offset:
    """A 2D displacement, in logical pixels."""
    dx: float = 0.0
    dy: float = 0.0

    def __add__(self, other: 'Offset') -> 'Offset':
        return Offset(self.dx + other.dx, self.dy + other.dy)

    def __sub__(self, other: 'Offset') -> 'Offset':
        return Offset(self.dx - other.dx, self.dy - other.dy)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.dx, self.dy)


@dataclass(frozen=True)
class Rect:
    """
    An axis-aligned rectangle.

    Rectangles are standardised on construction: a negative width or height
    moves the origin so that both extents are non-negative.

    :param x: Left edge.
    :param y: Top edge.
    :param width: Horizontal extent.
    :param height: Vertical extent.
    """
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def __post_init__(self):
        if self.width < 0:
            object.__setattr__(self, 'x', self.x + self.width)
            object.__setattr__(self, 'width', -self.width)
        if self.height < 0:
            object.__setattr__(self, 'y', self.y + self.height)
            object.__setattr__(self, 'height', -self.height)

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> 'Rect':
        return cls(left, top, right - left, bottom - top)

    @classmethod
    def parse(cls, text: str) -> 'Rect':
        """Parses ``"x,y,width,height"``."""
        parts = [p.strip() for p in text.split(',')]
        if len(parts) != 4:
            raise ValueError(f"Expected 'x,y,width,height', got {text!r}")
        return cls(*(float(p) for p in parts))

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def origin(self) -> Offset:
        return Offset(self.x, self.y)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def translate(self, offset: Offset) -> 'Rect':
        return Rect(self.x + offset.dx, self.y + offset.dy, self.width, self.height)

    def inset(self, left: float = 0, top: float = 0, right: float = 0, bottom: float = 0) -> 'Rect':
        return Rect(
            self.x + left,
            self.y + top,
            max(0.0, self.width - left - right),
            max(0.0, self.height - top - bottom),
        )

    def intersection(self, other: 'Rect') -> Optional['Rect']:
        """
        Returns the overlapping region, or None when the overlap has no area.
        """
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return None
        return Rect.from_ltrb(left, top, right, bottom)

    def intersects(self, other: 'Rect') -> bool:
        # Touching edges and empty rects do not count.
        return self.intersection(other) is not None

    def contains(self, other: 'Rect') -> bool:
        return (self.left <= other.left and self.top <= other.top
                and other.right <= self.right and other.bottom <= self.bottom)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def __str__(self):
        return f"({self.x:g}, {self.y:g}, {self.width:g}, {self.height:g})"
