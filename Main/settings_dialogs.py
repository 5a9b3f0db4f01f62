"""
Settings dialog for the editor font and the decoration properties.
"""
import copy

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QWidget, QHBoxLayout, QFormLayout,
    QFontComboBox, QSpinBox, QPushButton, QLineEdit, QColorDialog
)

from Engine.properties import int_or_none

SECTION = "background-phi-colors"

FIELD_STYLE = """
    QSpinBox, QLineEdit, QFontComboBox {
        background-color: #1E1F22;
        color: #E0E2E6;
        border: none;
        border-radius: 4px;
        padding: 6px;
        font-size: 13px;
    }
    QSpinBox:focus, QLineEdit:focus, QFontComboBox:focus {
        border: 1px solid #007ACC;
    }
"""

BUTTON_STYLE = """
    QPushButton {
        background-color: #3C4043;
        color: #E0E2E6;
        border: 1px solid #4A4D51;
        border-radius: 4px;
        padding: 8px 20px;
        min-width: 60px;
    }
    QPushButton:hover {
        background-color: #4A4D51;
    }
    QPushButton:pressed {
        background-color: #5A5D61;
    }
"""

# (settings key, label, default)
ALPHA_FIELDS = (
    ("indentAlpha", "Indent Alpha:", 0x11),
    ("indentActiveAlpha", "Active Indent Alpha:", 0x33),
    ("symbolAlpha", "Symbol Alpha:", 0x44),
    ("tokenAlpha", "Token Alpha:", 0x33),
    ("tokenActiveAlpha", "Active Token Alpha:", 0x66),
)


class SettingsDialog(QDialog):
    """
    A dialog to let users customize editor and decoration settings.
    """
    def __init__(self, settings, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.settings = copy.deepcopy(settings)
        section = self.settings.get(SECTION, {})

        self.container = QWidget()
        self.container.setStyleSheet("""
            QWidget {
                background-color: #282A2E;
            }
            QLabel {
                color: #E0E2E6;
            }
        """ + FIELD_STYLE)
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(self.container)

        content_layout = QVBoxLayout(self.container)
        content_layout.setContentsMargins(20, 10, 20, 20)
        content_layout.setSpacing(10)

        form_layout = QFormLayout()
        form_layout.setSpacing(10)
        form_layout.setLabelAlignment(Qt.AlignRight)

        self.font_combo = QFontComboBox()
        self.font_combo.setCurrentFont(QFont(self.settings.get('font_family', 'Consolas')))
        form_layout.addRow("Font Family:", self.font_combo)

        self.font_size_spinbox = QSpinBox()
        self.font_size_spinbox.setRange(8, 48)
        self.font_size_spinbox.setValue(self.settings.get('font_size', 12))
        form_layout.addRow("Font Size:", self.font_size_spinbox)

        self.delay_spinbox = QSpinBox()
        self.delay_spinbox.setRange(50, 1500)
        self.delay_spinbox.setSuffix(" ms")
        self.delay_spinbox.setValue(_int_or(section.get("delay"), 250))
        form_layout.addRow("Update Delay:", self.delay_spinbox)

        color_row = QHBoxLayout()
        self.base_color_edit = QLineEdit(str(section.get("baseColor") or "#CC6666"))
        self.pick_color_button = QPushButton("...")
        self.pick_color_button.setStyleSheet(BUTTON_STYLE)
        self.pick_color_button.clicked.connect(self.pick_base_color)
        color_row.addWidget(self.base_color_edit)
        color_row.addWidget(self.pick_color_button)
        form_layout.addRow("Base Color:", color_row)

        # Alpha channels are edited in hex, the way they are written in settings.json comments
        self.alpha_spinboxes = {}
        for key, label, default in ALPHA_FIELDS:
            spin = QSpinBox()
            spin.setRange(0, 255)
            spin.setDisplayIntegerBase(16)
            spin.setPrefix("0x")
            spin.setValue(_int_or(section.get(key), default))
            self.alpha_spinboxes[key] = spin
            form_layout.addRow(label, spin)

        content_layout.addLayout(form_layout)

        button_layout = QHBoxLayout()
        button_layout.setContentsMargins(0, 10, 0, 0)
        button_layout.addStretch()
        content_layout.addLayout(button_layout)

        self.ok_button = QPushButton("OK", self)
        self.cancel_button = QPushButton("Cancel", self)
        for btn in [self.ok_button, self.cancel_button]:
            btn.setStyleSheet(BUTTON_STYLE)
            button_layout.addWidget(btn)

        self.ok_button.clicked.connect(self.accept)
        self.cancel_button.clicked.connect(self.reject)

    def pick_base_color(self):
        """Let the user choose the base color with the standard color dialog."""
        color = QColorDialog.getColor(QColor(self.base_color_edit.text()), self, "Base Color")
        if color.isValid():
            self.base_color_edit.setText(color.name().upper())

    def get_settings(self):
        """
        Returns the settings with the dialog's values applied.
        """
        settings = copy.deepcopy(self.settings)
        settings['font_family'] = self.font_combo.currentFont().family()
        settings['font_size'] = self.font_size_spinbox.value()
        section = settings.setdefault(SECTION, {})
        section["delay"] = self.delay_spinbox.value()
        section["baseColor"] = self.base_color_edit.text().strip()
        for key, spin in self.alpha_spinboxes.items():
            section[key] = spin.value()
        return settings


def _int_or(value, default):
    number = int_or_none(value)
    return default if number is None else number
