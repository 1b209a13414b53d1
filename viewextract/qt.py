# viewextract/qt.py
"""
Qt integration: search real ``QWidget`` hierarchies.

``QtWidgetTree`` lets ``ViewLocator`` walk a widget tree, using window
coordinates from ``QWidget.mapTo``. ``extract_qt`` is the Qt counterpart of
``extract``: it puts a transparent adjunct widget over ``widget`` and re-runs
the search whenever ``widget`` is shown, moved, resized or re-laid-out::

    handle = extract_qt(editor_panel, QTextEdit, lambda edit: edit.setTabStopDistance(16))
    ...
    handle.detach()
"""
import logging
from typing import Any, List, Optional

import shiboken6
from PySide6 import QtWidgets
from PySide6.QtCore import QEvent, QObject, QPoint, Qt
from PySide6.QtWidgets import QWidget

from .exceptions import UnknownNativeType
from .extractor import MatchCallback, ViewExtractor
from .geometry import Rect
from .native import TypeSpec
from .scheduler import QtMainQueue

logger = logging.getLogger(__name__)

_LAYOUT_EVENTS = (QEvent.Type.Show, QEvent.Type.Resize, QEvent.Type.Move, QEvent.Type.LayoutRequest)


class QtWidgetTree:
    """``NativeTree`` adapter over ``QWidget`` parent/child relationships."""

    def resolve(self, target_type: TypeSpec) -> type:
        if isinstance(target_type, type):
            return target_type
        cls = getattr(QtWidgets, target_type, None)
        if not isinstance(cls, type):
            raise UnknownNativeType(f"PySide6.QtWidgets has no widget class {target_type!r}")
        return cls

    def children(self, node: QWidget) -> List[QWidget]:
        return [child for child in node.children() if isinstance(child, QWidget)]

    def is_instance(self, node: QWidget, target_type: TypeSpec) -> bool:
        return isinstance(node, self.resolve(target_type))

    def window_frame(self, node: QWidget) -> Rect:
        top_left = node.mapTo(node.window(), QPoint(0, 0))
        return Rect(top_left.x(), top_left.y(), node.width(), node.height())

    def window_of(self, node: QWidget) -> Optional[QWidget]:
        if not shiboken6.isValid(node):
            return None
        window = node.window()
        # A widget taken out of its window becomes, or sits under, a hidden top-level.
        if window is node or not window.isVisible():
            return None
        return window


class QtExtraction(QObject):
    """
    Keeps one ``extract_qt`` request alive. Parented to the target widget,
    so it goes away with it.
    """

    def __init__(self, target: QWidget, target_type: TypeSpec, on_match: MatchCallback,
                 deduplicate: Optional[bool] = None):
        super().__init__(target)
        self._target = target
        self._attached = True

        self.adjunct = QWidget(target)
        self.adjunct.setObjectName("viewextract-adjunct")
        self.adjunct.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.adjunct.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground)
        self.adjunct.setGeometry(target.rect())
        self.adjunct.lower()

        self.extractor = ViewExtractor(target_type, on_match, queue=QtMainQueue(),
                                       deduplicate=deduplicate, tree=QtWidgetTree())
        target.installEventFilter(self)

    @property
    def attached(self) -> bool:
        return self._attached

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self._target and event.type() in _LAYOUT_EVENTS:
            if event.type() == QEvent.Type.Resize:
                self.adjunct.setGeometry(self._target.rect())
            self.request_search()
        return False

    def request_search(self) -> None:
        self.extractor.queue.submit(self._run)

    def _run(self) -> Any:
        if not self._attached or not shiboken6.isValid(self.adjunct):
            logger.debug("Qt extraction skipped: detached")
            return None
        return self.extractor.run_search(self.adjunct)

    def detach(self) -> None:
        """Stops searching. Already-queued searches become no-ops."""
        if not self._attached:
            return
        self._attached = False
        if shiboken6.isValid(self._target):
            self._target.removeEventFilter(self)
        if shiboken6.isValid(self.adjunct):
            self.adjunct.deleteLater()


def extract_qt(widget: QWidget, target_type: TypeSpec, on_match: MatchCallback, *,
               deduplicate: Optional[bool] = None) -> QtExtraction:
    """
    Delivers the first ``target_type`` widget in ``widget``'s window that
    overlaps ``widget`` to ``on_match``, after each show, move, resize or
    layout of ``widget``.
    """
    return QtExtraction(widget, target_type, on_match, deduplicate=deduplicate)
