import json
import os

import pytest

from Main.settings_manager import APPLICATION_KEY


@pytest.fixture
def window(tmp_path, qapp):
    from PhiColors import MainWindow
    window = MainWindow(settings_dir=str(tmp_path))
    yield window
    window.close()
    window.deleteLater()


@pytest.fixture
def reconfigures(window, monkeypatch):
    calls = []
    monkeypatch.setattr(window.decoration_manager, "on_did_change_configuration", lambda: calls.append(1))
    return calls


def accept_dialog_with_delay(window, monkeypatch, delay):
    def open_settings_dialog():
        window.settings[APPLICATION_KEY]["delay"] = delay
        window.settings_manager.save_settings()
        return True
    monkeypatch.setattr(window.settings_manager, "open_settings_dialog", open_settings_dialog)


def test_first_start_writes_settings_file(window):
    with open(window.settings_file, encoding="utf-8") as f:
        assert json.load(f)[APPLICATION_KEY]["delay"] == 250


def test_dialog_save_reconfigures_once(window, reconfigures, monkeypatch):
    accept_dialog_with_delay(window, monkeypatch, 400)
    window.open_settings()
    # The file watcher then reports the dialog's own save
    window.on_settings_file_changed(window.settings_file)
    assert reconfigures == [1]
    assert window.settings_manager.delay_ms() == 400


def test_external_edit_after_dialog_save_reconfigures(window, reconfigures, monkeypatch):
    accept_dialog_with_delay(window, monkeypatch, 400)
    window.open_settings()
    with open(window.settings_file, "w", encoding="utf-8") as f:
        json.dump({APPLICATION_KEY: {"delay": 600}}, f)
    stat = os.stat(window.settings_file)
    os.utime(window.settings_file, ns=(stat.st_atime_ns, stat.st_mtime_ns + 10 ** 9))
    window.on_settings_file_changed(window.settings_file)
    assert reconfigures == [1, 1]
    assert window.settings_manager.delay_ms() == 600


def test_declined_dialog_does_not_reconfigure(window, reconfigures, monkeypatch):
    monkeypatch.setattr(window.settings_manager, "open_settings_dialog", lambda: False)
    window.open_settings()
    assert reconfigures == []
