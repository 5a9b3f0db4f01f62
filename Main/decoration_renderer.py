"""
Decoration Renderer
Turns style keys into background formats and spans into ExtraSelections
on a CodeEditor.
"""

from itertools import accumulate

from PySide6.QtGui import QTextCharFormat, QTextCursor
from PySide6.QtWidgets import QTextEdit

from Main.phi_colors import background_color, color_for_style_sheet


class Utf16Positions:
    """Maps Python string offsets to QTextDocument (UTF-16) positions."""

    def __init__(self, text: str):
        self._prefix = None
        if any(ord(ch) > 0xFFFF for ch in text):
            self._prefix = [0] + list(accumulate(2 if ord(ch) > 0xFFFF else 1 for ch in text))

    def __call__(self, offset: int) -> int:
        if self._prefix is None:
            return offset
        return self._prefix[offset]


class DecorationType:
    """Renderer handle for one style key."""

    def __init__(self, renderer, style, char_format: QTextCharFormat, name: str):
        self.renderer = renderer
        self.style = style
        self.format = char_format
        self.name = name
        self.disposed = False

    def dispose(self):
        self.renderer.remove(self)
        self.disposed = True

    def __repr__(self):
        return f"DecorationType({self.name})"


class QtDecorationRenderer:
    """
    Render capability for one editor.

    Groups are staged with apply_spans() and pushed to the editor in one go
    by flush().
    """

    def __init__(self, editor, error_base: str):
        self.editor = editor
        self.error_base = error_base
        self.selections = {}
        self._positions = Utf16Positions("")

    def begin_pass(self, text: str):
        self._positions = Utf16Positions(text)

    def create_handle(self, style) -> DecorationType:
        color = background_color(style, self.error_base)
        char_format = QTextCharFormat()
        char_format.setBackground(color)
        return DecorationType(self, style, char_format, color_for_style_sheet(color))

    def apply_spans(self, handle: DecorationType, spans):
        if handle.disposed:
            raise RuntimeError(f"{handle!r} has been disposed")
        document = self.editor.document()
        selections = []
        for span in spans:
            selection = QTextEdit.ExtraSelection()
            cursor = QTextCursor(document)
            cursor.setPosition(self._positions(span.start))
            cursor.setPosition(self._positions(span.end), QTextCursor.KeepAnchor)
            selection.cursor = cursor
            selection.format = handle.format
            selections.append(selection)
        self.selections[handle] = selections

    def remove(self, handle: DecorationType):
        self.selections.pop(handle, None)

    def flush(self):
        """Hand every staged selection to the editor."""
        extra_selections = []
        for selections in self.selections.values():
            extra_selections.extend(selections)
        self.editor.set_phi_selections(extra_selections)
