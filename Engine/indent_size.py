"""
Indent-size helpers: tab expansion and the editor's tab-size option.
"""

DEFAULT_TAB_SIZE = 4


def effective_width(indent_text: str, tab_size: int) -> int:
    """
    Column width of indent_text once tabs are expanded.

    A tab moves to the next multiple of tab_size from the running column,
    any other character takes one column.
    """
    column = 0
    for ch in indent_text:
        if ch == "\t":
            column += tab_size - (column % tab_size)
        else:
            column += 1
    return column


def resolve_tab_size(value) -> int:
    """Turn the host's tab-size option (int, numeric string or None) into a usable tab size."""
    if value is None or isinstance(value, bool):
        return DEFAULT_TAB_SIZE
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return DEFAULT_TAB_SIZE
    try:
        value = int(value)
    except (TypeError, ValueError):
        return DEFAULT_TAB_SIZE
    return max(1, value)
