import pytest

from Engine.indent_size import effective_width, resolve_tab_size


@pytest.mark.parametrize("tab_size", [1, 2, 4, 8])
def test_spaces_count_one_column_each(tab_size):
    assert effective_width("     ", tab_size) == 5


def test_lone_tab_is_tab_size_wide():
    assert effective_width("\t", 4) == 4
    assert effective_width("\t", 8) == 8


def test_tab_expands_to_next_stop_from_running_column():
    assert effective_width("a\t", 4) == 4
    assert effective_width(" \t", 4) == 4
    assert effective_width("\t ", 4) == 5
    assert effective_width("  \t\t", 4) == 8
    assert effective_width("\t\t", 1) == 2


def test_empty_indent():
    assert effective_width("", 4) == 0


def test_resolve_tab_size():
    assert resolve_tab_size(None) == 4
    assert resolve_tab_size(2) == 2
    assert resolve_tab_size("8") == 8
    assert resolve_tab_size("auto") == 4
    assert resolve_tab_size(0) == 1
    assert resolve_tab_size(True) == 4
