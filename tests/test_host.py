# tests/test_host.py
import unittest

from viewextract import native
from viewextract.base import Key, RepresentableWidget, StatelessWidget, Widget
from viewextract.exceptions import HostError
from viewextract.geometry import Offset, Rect
from viewextract.host import Host
from viewextract.scheduler import ManualQueue
from viewextract.widgets import Button, Column, Container, Label, Overlay, Padding, Row, ScrollView, TextField


class RecordingRepresentable(RepresentableWidget):
    def __init__(self, log, key=None):
        super().__init__(key=key)
        self.log = log

    def make_native(self, context):
        self.log.append("make")
        return native.NativeView(name="recording")

    def update_native(self, view, context):
        self.log.append(("update", view.window_frame()))

    def dismantle_native(self, view):
        self.log.append("dismantle")


class Greeting(StatelessWidget):
    builds = 0

    def __init__(self, name, key=None):
        super().__init__(key=key)
        self.name = name

    def build(self):
        Greeting.builds += 1
        return Label(text=f"Hello {self.name}", width=100, height=20)


class HostTestCase(unittest.TestCase):

    def setUp(self):
        self.queue = ManualQueue()
        self.host = Host(queue=self.queue, size=(400, 300))


class LayoutTests(HostTestCase):

    def test_padding_offsets_child(self):
        self.host.mount(Padding(Container(width=50, height=20, name="box"), padding=10))
        box = self.host.window.subviews[0]
        self.assertEqual(box.name, "box")
        self.assertEqual(box.frame, Rect(10, 10, 50, 20))

    def test_row_stacks_with_spacing(self):
        self.host.mount(Row([Label(width=30, height=10), Label(width=40, height=20)], spacing=5))
        stack = self.host.window.subviews[0]
        self.assertIsInstance(stack, native.StackView)
        self.assertEqual(stack.frame, Rect(0, 0, 75, 20))
        self.assertEqual([v.frame for v in stack.subviews], [Rect(0, 0, 30, 10), Rect(35, 0, 40, 20)])

    def test_column_uses_default_sizes(self):
        self.host.mount(Column([TextField(), Button(title="Go")]))
        field, button = self.host.window.subviews[0].subviews
        self.assertEqual(field.frame, Rect(0, 0, 200, 32))
        self.assertEqual(button.frame, Rect(0, 32, 88, 36))
        self.assertEqual(button.title, "Go")

    def test_scroll_view_applies_content_offset(self):
        self.host.mount(ScrollView(
            child=Column([Label(width=100, height=50, name="a"), Label(width=100, height=50, name="b")]),
            width=100, height=50, content_offset=Offset(0, 50),
        ))
        scroll = self.host.window.subviews[0]
        a, b = scroll.subviews[0].subviews
        self.assertEqual(scroll.content_offset, Offset(0, 50))
        self.assertEqual(a.window_frame(), Rect(0, -50, 100, 50))
        self.assertEqual(b.window_frame(), Rect(0, 0, 100, 50))

    def test_overlay_background_takes_child_frame_and_comes_first(self):
        self.host.mount(Padding(Overlay(child=Label(width=60, height=10, name="fg"),
                                        background=Container(name="bg")), padding=(4, 6, 0, 0)))
        bg, fg = self.host.window.subviews
        self.assertEqual((bg.name, fg.name), ("bg", "fg"))
        self.assertEqual(bg.frame, Rect(4, 6, 60, 10))
        self.assertEqual(fg.frame, Rect(4, 6, 60, 10))

    def test_props_are_copied_to_native_views(self):
        self.host.mount(TextField(text="hi", placeholder="Name", secure=True, name="field"))
        field = self.host.window.subviews[0]
        self.assertEqual((field.text, field.placeholder, field.secure), ("hi", "Name", True))


class ReconcileTests(HostTestCase):

    def test_unchanged_tree_reuses_native_views(self):
        tree = lambda: Column([Label(text="a"), TextField(text="b")])
        self.host.mount(tree())
        before = [v for _, v in native.walk(self.host.window)]
        self.host.mount(tree())
        after = [v for _, v in native.walk(self.host.window)]
        self.assertEqual([id(v) for v in before], [id(v) for v in after])
        self.assertEqual(self.host.pass_count, 2)

    def test_updated_props_reach_existing_view(self):
        self.host.mount(Label(text="one"))
        label = self.host.window.subviews[0]
        self.host.mount(Label(text="two"))
        self.assertIs(self.host.window.subviews[0], label)
        self.assertEqual(label.text, "two")

    def test_type_change_replaces_native_view(self):
        self.host.mount(Column([Label(text="x")]))
        old = self.host.window.subviews[0].subviews[0]
        self.host.mount(Column([Button(title="x")]))
        new = self.host.window.subviews[0].subviews[0]
        self.assertIsInstance(new, native.Button)
        self.assertIsNone(old.superview)

    def test_keyed_children_move_with_their_views(self):
        self.host.mount(Column([Label(key=Key("a"), name="a"), Label(key=Key("b"), name="b")]))
        stack = self.host.window.subviews[0]
        a, b = stack.subviews
        self.host.mount(Column([Label(key=Key("b"), name="b"), Label(key=Key("a"), name="a")]))
        self.assertEqual(stack.subviews, (b, a))
        self.assertEqual(b.frame.y, 0)

    def test_removed_children_leave_the_tree(self):
        self.host.mount(Column([Label(name="a"), Label(name="b")]))
        stack = self.host.window.subviews[0]
        b = stack.subviews[1]
        self.host.mount(Column([Label(name="a")]))
        self.assertEqual(len(stack.subviews), 1)
        self.assertIsNone(b.window)

    def test_stateless_widgets_rebuild_every_pass(self):
        Greeting.builds = 0
        self.host.mount(Greeting("Ada"))
        label = self.host.window.subviews[0]
        self.host.mount(Greeting("Grace"))
        self.assertEqual(Greeting.builds, 2)
        self.assertIs(self.host.window.subviews[0], label)
        self.assertEqual(label.text, "Hello Grace")

    def test_native_view_for_key(self):
        self.host.mount(Column([Label(key=Key("title"), name="title")]))
        self.assertEqual(self.host.native_view_for(Key("title")).name, "title")
        self.assertIsNone(self.host.native_view_for(Key("missing")))


class RepresentableTests(HostTestCase):

    def test_lifecycle_hooks(self):
        log = []
        self.host.mount(Overlay(child=Label(width=10, height=10), background=RecordingRepresentable(log)))
        self.host.layout()
        self.assertEqual(log, ["make", ("update", Rect(0, 0, 10, 10)), ("update", Rect(0, 0, 10, 10))])
        self.host.mount(Label())
        self.assertEqual(log[-1], "dismantle")


class SchedulingTests(HostTestCase):

    def test_request_layout_is_deferred_and_coalesced(self):
        self.host.mount(Label(), layout=False)
        self.host.request_layout()
        self.host.request_layout()
        self.assertEqual(self.host.pass_count, 0)
        self.assertEqual(self.queue.pending, 1)
        self.queue.drain()
        self.assertEqual(self.host.pass_count, 1)

    def test_set_root_schedules_a_pass(self):
        self.host.set_root(Label(name="late"))
        self.assertEqual(self.host.window.subviews, ())
        self.queue.drain()
        self.assertEqual(self.host.window.subviews[0].name, "late")

    def test_layout_without_root_raises(self):
        with self.assertRaises(HostError):
            self.host.layout()

    def test_request_after_unmount_is_dropped(self):
        self.host.mount(Label())
        self.host.request_layout()
        self.host.unmount()
        self.queue.drain()
        self.assertEqual(self.host.pass_count, 1)
        self.assertEqual(self.host.window.subviews, ())

    def test_unsupported_widget_raises(self):
        with self.assertRaises(HostError):
            self.host.mount(Widget())


if __name__ == '__main__':
    unittest.main()
