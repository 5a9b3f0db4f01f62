"""
Settings Management Module for Background Phi Colors
Loads and saves settings.json and resolves the decoration properties.
"""

import json

from PySide6.QtGui import QColor, QFont

from Engine.properties import Property, alpha_property, int_or_none
from Engine.style_keys import DecorationSettings
from Main.settings_dialogs import SettingsDialog

APPLICATION_KEY = "background-phi-colors"

delay = Property("delay", 250, 50, 1500)
base_color = Property("baseColor", "#CC6666")
indent_alpha = alpha_property("indentAlpha", 0x11)
indent_active_alpha = alpha_property("indentActiveAlpha", 0x33)
symbol_alpha = alpha_property("symbolAlpha", 0x44)
token_alpha = alpha_property("tokenAlpha", 0x33)
token_active_alpha = alpha_property("tokenActiveAlpha", 0x66)

ALPHA_PROPERTIES = (indent_alpha, indent_active_alpha, symbol_alpha, token_alpha, token_active_alpha)
PROPERTIES = (delay, base_color) + ALPHA_PROPERTIES


def default_settings():
    """Settings used before (or without) a settings file."""
    return {
        'font_family': 'Consolas',
        'font_size': 12,
        APPLICATION_KEY: {prop.name: prop.default_value for prop in PROPERTIES},
    }


def _raw_color(value):
    if not isinstance(value, str):
        return None
    color = QColor(value.strip())
    return color.name() if color.isValid() else None


class SettingsManager:
    """Manages all settings operations for the main window."""

    def __init__(self, main_window):
        """
        Initialize the settings manager.

        Args:
            main_window: object exposing settings (dict) and settings_file (path)
        """
        self.window = main_window

    def load_settings(self):
        """Load settings from the settings file."""
        try:
            with open(self.window.settings_file, 'r', encoding='utf-8') as f:
                settings = json.load(f)
            if isinstance(settings, dict):
                section = settings.pop(APPLICATION_KEY, None)
                self.window.settings.update(settings)
                if isinstance(section, dict):
                    self.window.settings.setdefault(APPLICATION_KEY, {}).update(section)
        except (FileNotFoundError, json.JSONDecodeError):
            pass

    def save_settings(self):
        """Save settings to the settings file."""
        try:
            with open(self.window.settings_file, 'w', encoding='utf-8') as f:
                json.dump(self.window.settings, f, indent=4)
        except Exception as e:
            print(f"Error saving settings: {e}")

    def section(self):
        section = self.window.settings.get(APPLICATION_KEY)
        return section if isinstance(section, dict) else {}

    def resolve_properties(self):
        """Resolve every property from the current settings (clamped, defaults for gaps)."""
        section = self.section()
        delay.resolve(int_or_none(section.get(delay.name)))
        color = _raw_color(section.get(base_color.name))
        base_color.resolve(color)
        for prop in ALPHA_PROPERTIES:
            prop.resolve(int_or_none(section.get(prop.name)))

    def decoration_settings(self) -> DecorationSettings:
        """Snapshot of the resolved properties for the engine."""
        self.resolve_properties()
        return DecorationSettings(
            base_color=QColor(base_color.value).name(),
            indent_alpha=indent_alpha.value,
            indent_active_alpha=indent_active_alpha.value,
            symbol_alpha=symbol_alpha.value,
            token_alpha=token_alpha.value,
            token_active_alpha=token_active_alpha.value,
        )

    def delay_ms(self) -> int:
        return delay.resolve(int_or_none(self.section().get(delay.name)))

    def editor_font(self):
        return QFont(self.window.settings['font_family'], self.window.settings['font_size'])

    def apply_settings(self):
        """Apply the current font to all open editors."""
        font = self.editor_font()
        for editor in self.window.open_editors():
            editor.setFont(font)

    def open_settings_dialog(self):
        """Open the settings dialog; accepted changes are saved and applied."""
        dialog = SettingsDialog(self.window.settings, self.window)
        if dialog.exec():
            self.window.settings = dialog.get_settings()
            self.apply_settings()
            self.save_settings()
            self.window.statusBar().showMessage("Settings updated.", 2000)
            return True
        return False
