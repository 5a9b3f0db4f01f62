"""
Decoration Manager
Connects editor events to decoration passes: configuration changes and
editor switches recompute at once, typing and cursor moves are debounced.
"""

from Engine.decoration_aggregator import DecorationAggregator
from Engine.style_keys import DecorationSettings
from Main.decoration_renderer import QtDecorationRenderer
from Main.decoration_scheduler import DecorationScheduler


class EditorDecorations:
    """Renderer and aggregator pair owned by one editor."""

    def __init__(self, editor, settings: DecorationSettings):
        self.renderer = QtDecorationRenderer(editor, settings.base_color)
        self.aggregator = DecorationAggregator(self.renderer.create_handle, self.renderer.apply_spans)

    def reset(self, settings: DecorationSettings):
        self.aggregator.reset()
        self.renderer.error_base = settings.base_color


class DecorationManager:
    """Manages phi-colour decorations for every editor of the main window."""

    def __init__(self, main_window, scheduler=None):
        self.window = main_window
        self.settings = DecorationSettings()
        self.scheduler = scheduler or DecorationScheduler()
        self.editors = {}

    def attach(self, editor):
        """Start decorating an editor."""
        if editor in self.editors:
            return
        self.editors[editor] = EditorDecorations(editor, self.settings)
        editor.textChanged.connect(self.on_did_change_text_document)
        editor.cursorPositionChanged.connect(self.on_did_change_selection)
        self.update_decoration(editor)

    def detach(self, editor):
        decorations = self.editors.pop(editor, None)
        if decorations is None:
            return
        try:
            editor.textChanged.disconnect(self.on_did_change_text_document)
            editor.cursorPositionChanged.disconnect(self.on_did_change_selection)
        except (RuntimeError, TypeError):
            # already disconnected when the widget is being destroyed
            pass
        decorations.aggregator.reset()

    def on_did_change_configuration(self):
        """Re-read settings, drop every renderer handle and redraw all editors."""
        self.settings = self.window.settings_manager.decoration_settings()
        self.scheduler.delay_ms = self.window.settings_manager.delay_ms()
        self.scheduler.cancel()
        for editor, decorations in list(self.editors.items()):
            decorations.reset(self.settings)
            self.update_decoration(editor)

    def on_did_change_active_editor(self, *_):
        editor = self.window.get_current_editor()
        if editor is not None:
            self.update_decoration(editor)

    def on_did_change_text_document(self):
        editor = self.window.get_current_editor()
        if editor is not None:
            self.scheduler.schedule(self.update_decoration, editor)

    on_did_change_selection = on_did_change_text_document

    def update_decoration(self, editor):
        """One full decoration pass over the editor's current text."""
        decorations = self.editors.get(editor)
        if decorations is None:
            return None
        text = editor.toPlainText()
        decorations.renderer.begin_pass(text)
        spans = decorations.aggregator.update(text, editor.tab_size(), editor.cursor_context(), self.settings)
        decorations.renderer.flush()
        return spans
