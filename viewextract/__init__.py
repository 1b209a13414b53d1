# viewextract/__init__.py

"""
viewextract

Reach the native views behind declarative widgets. Wrap a widget with
``extract`` (or call ``widget.extract(...)``) and receive the first native
view of a given type that sits under it, after every layout pass, on the
main queue.

The Qt adapter lives in ``viewextract.qt`` and is imported on demand.
"""

from .base import Key, Widget, StatelessWidget, RepresentableWidget, NativeContext
from .config import Config, get_config, configure_logging
from .exceptions import ViewExtractError, UnknownNativeType, TreeFormatError, HostError
from .geometry import Offset, Rect
from .locator import ViewLocator, locate
from .native import (
    NativeView,
    NativeTree,
    NativeTypeRegistry,
    ViewTree,
    Window,
    registry,
    view_from_dict,
    describe_path,
)
from .scheduler import MainQueue, ManualQueue, QtMainQueue, get_main_queue, set_main_queue
from .host import Host
from .extractor import ViewExtractor, extract
from .widgets import (
    NativeWidget,
    Container,
    ScrollView,
    TextField,
    Label,
    Button,
    ImageView,
    Flex,
    Row,
    Column,
    Padding,
    Overlay,
)

__version__ = "0.1.0"

__all__ = [
    'Key', 'Widget', 'StatelessWidget', 'RepresentableWidget', 'NativeContext',
    'Config', 'get_config', 'configure_logging',
    'ViewExtractError', 'UnknownNativeType', 'TreeFormatError', 'HostError',
    'Offset', 'Rect',
    'ViewLocator', 'locate',
    'NativeView', 'NativeTree', 'NativeTypeRegistry', 'ViewTree', 'Window', 'registry',
    'view_from_dict', 'describe_path',
    'MainQueue', 'ManualQueue', 'QtMainQueue', 'get_main_queue', 'set_main_queue',
    'Host',
    'ViewExtractor', 'extract',
    'NativeWidget', 'Container', 'ScrollView', 'TextField', 'Label', 'Button', 'ImageView',
    'Flex', 'Row', 'Column', 'Padding', 'Overlay',
]
