import os
import sys

from PySide6.QtCore import QFileSystemWatcher, QFileInfo
from PySide6.QtGui import QKeySequence, QShortcut, QAction
from PySide6.QtWidgets import QApplication, QMainWindow, QTabWidget, QFileDialog, QMessageBox

from Details.Main_Code_Editor import CodeEditor
from Main.decoration_manager import DecorationManager
from Main.settings_manager import SettingsManager, default_settings


def settings_directory():
    """Per-user settings directory; PHI_COLORS_SETTINGS_DIR overrides it."""
    override = os.environ.get('PHI_COLORS_SETTINGS_DIR')
    if override:
        return override
    return os.path.join(os.environ.get('LOCALAPPDATA') or os.environ.get('APPDATA') or os.path.expanduser("~"), "BackgroundPhiColors")


class MainWindow(QMainWindow):
    """
    Tabbed plain-text editor that paints indentation, symbols, tokens and
    whitespace problems with phi-ratio background colours.
    """
    def __init__(self, settings_dir=None):
        super().__init__()
        self.setWindowTitle("Background Phi Colors")
        self.setGeometry(100, 100, 1200, 800)
        self.setStyleSheet("background-color: #131314;")

        self.settings_dir = settings_dir or settings_directory()
        try:
            os.makedirs(self.settings_dir, exist_ok=True)
        except OSError as e:
            print(f"Error creating settings directory: {e}")
        self.settings_file = os.path.join(self.settings_dir, "settings.json")
        self.settings = default_settings()

        self.settings_manager = SettingsManager(self)
        self.decoration_manager = DecorationManager(self)
        self.load_settings()
        if not os.path.exists(self.settings_file):
            self.settings_manager.save_settings()

        self.editor_tabs = QTabWidget()
        self.editor_tabs.setTabsClosable(True)
        self.editor_tabs.setMovable(True)
        self.editor_tabs.tabCloseRequested.connect(self.close_tab)
        self.editor_tabs.currentChanged.connect(self.decoration_manager.on_did_change_active_editor)
        self.setCentralWidget(self.editor_tabs)

        self._create_menus()
        self.zoom_in_shortcut = QShortcut(QKeySequence("Ctrl+="), self)
        self.zoom_in_shortcut.activated.connect(lambda: self._zoom(1))
        self.zoom_out_shortcut = QShortcut(QKeySequence("Ctrl+-"), self)
        self.zoom_out_shortcut.activated.connect(lambda: self._zoom(-1))

        # (mtime, size) of settings.json right after the dialog last saved it
        self._own_save_signature = None
        # Edits made to settings.json outside the dialog count as configuration changes
        self.settings_watcher = QFileSystemWatcher(self)
        if os.path.exists(self.settings_file):
            self.settings_watcher.addPath(self.settings_file)
        self.settings_watcher.fileChanged.connect(self.on_settings_file_changed)

        self.decoration_manager.on_did_change_configuration()

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")
        for label, shortcut, handler in (
            ("New", "Ctrl+N", self.new_file),
            ("Open...", "Ctrl+O", self.open_file_dialog),
            ("Save", "Ctrl+S", self.save_current_file),
            ("Settings", "Ctrl+,", self.open_settings),
        ):
            action = QAction(label, self)
            action.setShortcut(shortcut)
            action.triggered.connect(handler)
            file_menu.addAction(action)

    def load_settings(self):
        """Load settings from file."""
        self.settings_manager.load_settings()

    def get_current_editor(self):
        widget = self.editor_tabs.currentWidget()
        return widget if isinstance(widget, CodeEditor) else None

    def open_editors(self):
        return [self.editor_tabs.widget(i) for i in range(self.editor_tabs.count())]

    def add_editor(self, text="", title="Untitled", file_path=None):
        """Create an editor tab, decorate it and make it current."""
        editor = CodeEditor(self)
        editor.setFont(self.settings_manager.editor_font())
        editor.setPlainText(text)
        editor.file_path = file_path
        index = self.editor_tabs.addTab(editor, title)
        self.decoration_manager.attach(editor)
        self.editor_tabs.setCurrentIndex(index)
        return editor

    def new_file(self):
        return self.add_editor()

    def open_file_dialog(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open File")
        if path:
            self.open_file(path)

    def open_file(self, path):
        """Open a file in a new tab (or switch to it if it is already open)."""
        path = os.path.abspath(path)
        for editor in self.open_editors():
            if editor.file_path == path:
                self.editor_tabs.setCurrentWidget(editor)
                return editor
        try:
            with open(path, 'r', encoding='utf-8') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            QMessageBox.warning(self, "Open File", f"Could not open {path}:\n{e}")
            return None
        return self.add_editor(text, QFileInfo(path).fileName(), path)

    def save_current_file(self):
        editor = self.get_current_editor()
        if editor is None:
            return
        path = editor.file_path
        if not path:
            path, _ = QFileDialog.getSaveFileName(self, "Save File")
            if not path:
                return
        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(editor.toPlainText())
        except OSError as e:
            QMessageBox.warning(self, "Save File", f"Could not save {path}:\n{e}")
            return
        editor.file_path = path
        self.editor_tabs.setTabText(self.editor_tabs.indexOf(editor), QFileInfo(path).fileName())
        self.statusBar().showMessage(f"Saved {path}", 2000)

    def close_tab(self, index):
        editor = self.editor_tabs.widget(index)
        if editor is None:
            return
        self.decoration_manager.detach(editor)
        self.editor_tabs.removeTab(index)
        editor.deleteLater()

    def _settings_signature(self):
        try:
            stat = os.stat(self.settings_file)
        except OSError:
            return None
        return (stat.st_mtime_ns, stat.st_size)

    def open_settings(self):
        if self.settings_manager.open_settings_dialog():
            # The watcher reports this save too; it is not a new change
            self._own_save_signature = self._settings_signature()
            self.decoration_manager.on_did_change_configuration()

    def on_settings_file_changed(self, path):
        """Reload settings.json after an external edit and redraw everything."""
        # Editors that save by replace drop the file from the watcher
        if os.path.exists(path) and path not in self.settings_watcher.files():
            self.settings_watcher.addPath(path)
        signature = self._settings_signature()
        if signature is not None and signature == self._own_save_signature:
            return
        self.settings = default_settings()
        self.load_settings()
        self.settings_manager.apply_settings()
        self.decoration_manager.on_did_change_configuration()

    def _zoom(self, delta):
        editor = self.get_current_editor()
        if editor is not None:
            editor.zoom(delta)


def main(argv=None):
    argv = sys.argv if argv is None else argv
    app = QApplication(argv)
    window = MainWindow()
    opened = [window.open_file(a) for a in argv[1:] if os.path.isfile(a)]
    if not any(editor is not None for editor in opened):
        window.new_file()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
