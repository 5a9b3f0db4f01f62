from functools import reduce

from Engine.span_annotators import (
    SYMBOL_CHARACTERS, SYMBOL_HUES, SYMBOL_PATTERN, CursorContext,
    annotate_body_spaces, annotate_symbols, annotate_tokens, annotate_trailing_spaces, token_hash,
)
from Engine.style_keys import ERROR_STYLE, HueStyle, Span

NO_CURSOR = CursorContext()


def test_trailing_whitespace_after_text():
    assert annotate_trailing_spaces("abc   ", 4, NO_CURSOR, None) == [Span(3, 3, ERROR_STYLE)]


def test_whitespace_only_line_has_no_trailing_span():
    assert annotate_trailing_spaces("   ", 4, NO_CURSOR, None) == []
    assert annotate_trailing_spaces("a\n \t\nb", 4, NO_CURSOR, None) == []


def test_trailing_whitespace_before_crlf():
    text = "abc   \r\nx  \n"
    assert annotate_trailing_spaces(text, 4, NO_CURSOR, None) == [
        Span(3, 3, ERROR_STYLE), Span(9, 2, ERROR_STYLE),
    ]


def test_trailing_whitespace_before_lone_cr():
    assert annotate_trailing_spaces("a\rb   \r", 4, NO_CURSOR, None) == [Span(3, 3, ERROR_STYLE)]


def test_every_symbol_has_a_hue_bucket():
    assert len(SYMBOL_CHARACTERS) == 31
    assert set(SYMBOL_CHARACTERS) == set(SYMBOL_HUES)
    for ch in SYMBOL_CHARACTERS:
        assert SYMBOL_PATTERN.fullmatch(ch), ch


def test_symbol_pattern_ignores_other_characters():
    assert SYMBOL_PATTERN.search("abc_ 09\t\n") is None


def test_brackets_share_a_hue(settings):
    spans = annotate_symbols("a(b)", 4, NO_CURSOR, settings)
    style = HueStyle(settings.base_color, 7, settings.symbol_alpha)
    assert spans == [Span(1, 1, style), Span(3, 1, style)]


def test_token_hash_is_a_pure_function_of_code_points():
    assert token_hash("a") == 97 % 34
    assert token_hash("foo") == (((102 * 719) + 111) * 719 + 111) % 34 == 20
    assert token_hash("foo") == token_hash("".join(["f", "o", "o"]))


def test_token_hash_reduces_long_tokens():
    token = "ab" * 50
    unreduced = reduce(lambda acc, code: acc * 719 + code, map(ord, token))
    assert token_hash(token) == unreduced % 34
    assert token_hash("a" * 200000) in range(34)


def test_tokens_on_cursor_line_are_active(settings):
    cursor = CursorContext("foo = 1", 0)
    spans = annotate_tokens("foo bar\nfoo", 4, cursor, settings)
    base = settings.base_color
    assert spans == [
        Span(0, 3, HueStyle(base, token_hash("foo") + 1, settings.token_active_alpha)),
        Span(4, 3, HueStyle(base, token_hash("bar") + 1, settings.token_alpha)),
        Span(8, 3, HueStyle(base, token_hash("foo") + 1, settings.token_active_alpha)),
    ]


def test_body_space_runs(settings):
    base = settings.base_color
    assert annotate_body_spaces("a  b", 4, NO_CURSOR, settings) == [
        Span(1, 2, HueStyle(base, 2, settings.indent_alpha)),
    ]
    assert annotate_body_spaces("a b", 4, NO_CURSOR, settings) == []


def test_body_tab_width_depends_on_its_column(settings):
    base = settings.base_color
    assert annotate_body_spaces("a\tb", 4, NO_CURSOR, settings) == [
        Span(1, 1, HueStyle(base, 3, settings.indent_alpha)),
    ]
    assert annotate_body_spaces("abc\tb", 4, NO_CURSOR, settings) == [
        Span(3, 1, HueStyle(base, 1, settings.indent_alpha)),
    ]


def test_body_scan_skips_leading_and_trailing_whitespace(settings):
    spans = annotate_body_spaces("  x  y  ", 4, NO_CURSOR, settings)
    assert [(span.start, span.length) for span in spans] == [(3, 2)]


def test_body_spaces_on_lines_after_lone_cr(settings):
    assert annotate_body_spaces("x\ra  b", 4, NO_CURSOR, settings) == [
        Span(3, 2, HueStyle(settings.base_color, 2, settings.indent_alpha)),
    ]


def test_cursor_context_from_offset():
    cursor = CursorContext.at("ab\n  cd\nef", 6)
    assert cursor == CursorContext("  cd", 3)
    assert cursor.indent_width(4) == 2
    assert cursor.strong_tokens() == {"cd"}


def test_cursor_indent_only_counts_whitespace_before_the_cursor():
    assert CursorContext("\t\tx", 1).indent_width(4) == 4
    assert CursorContext("    x", 10).indent_width(4) == 4
    assert CursorContext("", 0).indent_width(4) == 0
