# viewextract/base.py
import uuid
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Union

if TYPE_CHECKING:
    from .host import Host
    from .native import NativeView, TypeSpec
    from .scheduler import MainQueue


# --- Key Class ---
class Key:
    """
    A unique identifier for a widget to help distinguish it across rebuilds.

    :param value: Any hashable value to uniquely represent the widget.
    """
    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Key) and self.value == other.value

    def __hash__(self):
        # Lists and dicts are common key values; hash a frozen form of them.
        if isinstance(self.value, list):
            return hash(tuple(self.value))
        if isinstance(self.value, dict):
            return hash(tuple(sorted(self.value.items())))
        return hash(self.value)

    def __repr__(self):
        return f"Key({self.value!r})"


# --- Base Widget ---
class Widget:
    """
    The base class for all declarative widgets.

    A widget is an immutable description. The host turns widgets into
    elements and native views, and rebuilds the description on every pass.

    :param key: Optional Key to identify this widget across rebuilds.
    :param children: Optional list of child widgets.
    """

    def __init__(self, key: Optional[Key] = None, children: Optional[List['Widget']] = None):
        self.key = key
        self._children: List['Widget'] = children if children is not None else []
        self._internal_id: str = str(uuid.uuid4())

    def get_unique_id(self) -> Union[Key, str]:
        """
        Returns a unique identifier for the widget (Key if set, else internal UUID).
        """
        return self.key if self.key is not None else self._internal_id

    def get_children(self) -> List['Widget']:
        return self._children

    def render_props(self) -> Dict[str, Any]:
        """
        Return the properties the host copies onto the native view.

        Subclasses override this; the base widget has none.
        """
        return {}

    def extract(self, target_type: 'TypeSpec', on_match: Callable[[Any], None], *,
                queue: Optional['MainQueue'] = None, deduplicate: Optional[bool] = None) -> 'Widget':
        """
        Wraps this widget so that ``on_match`` receives the first native view
        of ``target_type`` under it, after every layout pass.

        See ``viewextract.extractor.extract``.
        """
        from .extractor import extract
        return extract(self, target_type, on_match, queue=queue, deduplicate=deduplicate)

    def __repr__(self):
        return f"{self.__class__.__name__}(key={self.key})"


class StatelessWidget(Widget):
    """
    A widget that describes part of the user interface by building other
    widgets. ``build`` is called again on every layout pass.
    """
    def __init__(self, key: Optional[Key] = None):
        super().__init__(key=key)

    def build(self) -> Widget:
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement the build() method."
        )


class NativeContext:
    """
    Passed to ``RepresentableWidget`` hooks.

    :attr host: The host running the current pass.
    :attr coordinator: Whatever ``make_coordinator`` returned for this
        mounted widget. It outlives rebuilds of the widget itself.
    :attr queue: The host's main queue.
    """
    def __init__(self, host: 'Host', coordinator: Any = None):
        self.host = host
        self.coordinator = coordinator

    @property
    def queue(self) -> 'MainQueue':
        return self.host.queue


class RepresentableWidget(Widget):
    """
    A widget backed by a native view it creates and updates itself.

    The host calls ``make_coordinator`` and ``make_native`` once when the
    widget is first mounted, ``update_native`` after every layout pass (once
    the native frame is final), and ``dismantle_native`` when the widget
    leaves the tree.
    """

    def make_coordinator(self) -> Any:
        """Per-mount state that survives rebuilds. None by default."""
        return None

    def make_native(self, context: NativeContext) -> 'NativeView':
        raise NotImplementedError(f"{self.__class__.__name__} must implement make_native()")

    def update_native(self, view: 'NativeView', context: NativeContext) -> None:
        pass

    def dismantle_native(self, view: 'NativeView') -> None:
        pass

    def intrinsic_size(self):
        """Preferred (width, height); None lets the parent decide."""
        return None
