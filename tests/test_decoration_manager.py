import pytest
from PySide6.QtGui import QTextCursor

from Details.Main_Code_Editor import CodeEditor
from Engine.style_keys import ERROR_STYLE
from Main.decoration_manager import DecorationManager
from Main.decoration_renderer import Utf16Positions
from Main.decoration_scheduler import DecorationScheduler
from Main.phi_colors import ERROR_ALPHA
from Main.settings_manager import SettingsManager, default_settings

TEXT = "def f():\n    return 1   \n"


class FakeWindow:
    def __init__(self, editor, tmp_path):
        self.settings = default_settings()
        self.settings_file = str(tmp_path / "settings.json")
        self.settings_manager = SettingsManager(self)
        self.editor = editor

    def get_current_editor(self):
        return self.editor


class FakeTimer:
    def __init__(self):
        self.pending = []

    def __call__(self, delay_ms, callback):
        self.pending.append(callback)

    def run_all(self):
        pending, self.pending = self.pending, []
        for callback in pending:
            callback()


@pytest.fixture
def editor(qapp):
    editor = CodeEditor()
    editor.setPlainText(TEXT)
    yield editor
    editor.deleteLater()


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def manager(editor, timer, tmp_path):
    manager = DecorationManager(FakeWindow(editor, tmp_path), DecorationScheduler(250, timer))
    manager.on_did_change_configuration()
    manager.attach(editor)
    return manager


def selection_ranges(editor):
    return {
        (selection.cursor.selectionStart(), selection.cursor.selectionEnd()): selection
        for selection in editor.phi_selections
    }


def test_attach_renders_immediately(manager, editor):
    spans = manager.update_decoration(editor)
    assert len(editor.phi_selections) == sum(len(group) for group in spans.values())
    trailing = selection_ranges(editor)[(21, 24)]
    assert trailing.format.background().color().alpha() == ERROR_ALPHA


def test_typing_is_debounced(manager, editor, timer):
    editor.moveCursor(QTextCursor.End)
    editor.insertPlainText("x")
    editor.insertPlainText("y")
    assert len(timer.pending) >= 2
    timer.run_all()
    assert editor.toPlainText().endswith("xy")
    assert any(start == len(TEXT) for start, _ in selection_ranges(editor))


def test_configuration_change_disposes_handles(manager, editor):
    decorations = manager.editors[editor]
    old_handles = [group.handle for group in decorations.aggregator.groups.values()]
    manager.on_did_change_configuration()
    assert all(handle.disposed for handle in old_handles)
    assert decorations.aggregator.groups[ERROR_STYLE].handle not in old_handles


def test_detach_stops_decorating(manager, editor):
    manager.detach(editor)
    assert editor not in manager.editors
    assert manager.update_decoration(editor) is None


def test_tab_size_follows_editor(manager, editor):
    editor.set_tab_size("2")
    assert editor.tab_size() == 2


def test_utf16_positions():
    assert Utf16Positions("abc")(2) == 2
    positions = Utf16Positions("a\U0001F600b")
    assert positions(1) == 1
    assert positions(2) == 3
    assert positions(3) == 4
