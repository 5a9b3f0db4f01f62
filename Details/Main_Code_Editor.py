
from PySide6.QtCore import Qt, QRect, QSize, QEvent
from PySide6.QtGui import QPainter, QTextFormat, QColor, QFont
from PySide6.QtWidgets import QPlainTextEdit, QTextEdit, QWidget

from Engine.indent_size import DEFAULT_TAB_SIZE, resolve_tab_size
from Engine.span_annotators import CursorContext


class LineNumberArea(QWidget):
    """
    A widget that displays line numbers next to a CodeEditor.
    """
    def __init__(self, editor):
        super().__init__(editor)
        self.editor = editor

    def sizeHint(self):
        return QSize(self.editor.lineNumberAreaWidth(), 0)

    def paintEvent(self, event):
        self.editor.lineNumberAreaPaintEvent(event)


class CodeEditor(QPlainTextEdit):
    """
    A QPlainTextEdit with line numbers, current line highlighting and
    phi-colour background decorations.
    """
    def __init__(self, parent=None, tab_size=DEFAULT_TAB_SIZE):
        super().__init__(parent)
        self.file_path = None
        self.lineNumberArea = LineNumberArea(self)
        # Background decorations from the decoration manager
        self.phi_selections = []
        self._tab_size = resolve_tab_size(tab_size)

        # Indentation must stay visible column for column
        self.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.setUndoRedoEnabled(True)

        self.blockCountChanged.connect(self.updateLineNumberAreaWidth)
        self.updateRequest.connect(self.updateLineNumberArea)
        self.cursorPositionChanged.connect(self.highlightCurrentLine)
        self.horizontalScrollBar().valueChanged.connect(self.lineNumberArea.update)

        self.setStyleSheet("""
            QPlainTextEdit {
                background: #1E1E1E;
                border: none;
                padding: 10px;
                color: #D4D4D4;
            }
        """)
        self.updateLineNumberAreaWidth(0)
        self._apply_tab_stop()
        self.highlightCurrentLine()

    def tab_size(self) -> int:
        """Tab size in columns, as the decoration passes expand tabs."""
        return self._tab_size

    def set_tab_size(self, tab_size):
        self._tab_size = resolve_tab_size(tab_size)
        self._apply_tab_stop()

    def _apply_tab_stop(self):
        self.setTabStopDistance(self._tab_size * self.fontMetrics().horizontalAdvance(' '))

    def cursor_context(self) -> CursorContext:
        """Text of the cursor's line and the cursor column on it."""
        cursor = self.textCursor()
        return CursorContext(cursor.block().text(), cursor.positionInBlock())

    def set_phi_selections(self, selections):
        self.phi_selections = selections
        self.highlightCurrentLine()

    def changeEvent(self, event):
        if event.type() == QEvent.FontChange:
            # Tab stops and the gutter follow the font (zoom)
            self.lineNumberArea.setFont(self.font())
            self.updateLineNumberAreaWidth(0)
            self._apply_tab_stop()
        super().changeEvent(event)

    def lineNumberAreaWidth(self):
        """
        Calculates the required width for the line number area based on the number of lines.
        """
        digits = len(str(max(1, self.blockCount())))
        return 35 + self.fontMetrics().horizontalAdvance('1') * digits

    def updateLineNumberAreaWidth(self, _):
        self.setViewportMargins(self.lineNumberAreaWidth(), 0, 0, 0)

    def updateLineNumberArea(self, rect, dy):
        """
        Updates or scrolls the line number area when the editor content changes.
        """
        if dy:
            self.lineNumberArea.scroll(0, dy)
        else:
            self.lineNumberArea.update(0, rect.y(), self.lineNumberArea.width(), rect.height())
        if rect.contains(self.viewport().rect()):
            self.updateLineNumberAreaWidth(0)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        cr = self.contentsRect()
        self.lineNumberArea.setGeometry(
            QRect(cr.left(), cr.top(), self.lineNumberAreaWidth(), cr.height())
        )

    def lineNumberAreaPaintEvent(self, event):
        """
        Paints the line numbers for visible blocks.
        """
        painter = QPainter(self.lineNumberArea)
        try:
            painter.setFont(self.font())
            painter.fillRect(event.rect(), QColor("#1E1E1E"))

            block = self.firstVisibleBlock()
            blockNumber = block.blockNumber()
            top = self.blockBoundingGeometry(block).translated(self.contentOffset()).top()
            bottom = top + self.blockBoundingRect(block).height()
            height = self.fontMetrics().height()

            while block.isValid() and top <= event.rect().bottom():
                if block.isVisible() and bottom >= event.rect().top():
                    painter.setPen(QColor("#7F8C8D"))
                    painter.drawText(
                        0, int(top), self.lineNumberArea.width() - 15, height,
                        Qt.AlignRight, str(blockNumber + 1)
                    )
                block = block.next()
                top = bottom
                bottom = top + self.blockBoundingRect(block).height()
                blockNumber += 1
        finally:
            painter.end()

    def highlightCurrentLine(self):
        """
        Highlights the current line under the phi-colour decorations.
        """
        extraSelections = []
        if not self.isReadOnly():
            selection = QTextEdit.ExtraSelection()
            selection.format.setBackground(QColor("#282A2E"))
            selection.format.setProperty(QTextFormat.FullWidthSelection, True)
            selection.cursor = self.textCursor()
            selection.cursor.clearSelection()
            extraSelections.append(selection)
        extraSelections.extend(self.phi_selections)
        self.setExtraSelections(extraSelections)

    def zoom(self, delta):
        """Grow or shrink the editor font by delta points."""
        font = QFont(self.font())
        font.setPointSize(max(6, font.pointSize() + delta))
        self.setFont(font)
