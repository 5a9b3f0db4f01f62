"""
Span Annotators
Independent regex classifiers over the whole document. Each returns a flat
list of spans; none of them depends on another's output.
"""

import re
from dataclasses import dataclass

from Engine.indent_decomposer import indent_spans
from Engine.indent_size import effective_width
from Engine.pattern_matcher import BOL, EOL, compile_pattern, find_all
from Engine.style_keys import ERROR_STYLE, Span

# Symbol -> hue bucket. Paired brackets share a bucket.
SYMBOL_HUES = {
    "!": 1,
    ".": 2,
    ",": 3,
    ":": 4,
    ";": 5,
    "(": 6,
    ")": 6,
    "[": 7,
    "]": 7,
    "{": 8,
    "}": 8,
    "<": 9,
    ">": 9,
    "\"": 10,
    "'": 11,
    "`": 12,
    "#": 13,
    "$": 14,
    "%": 15,
    "&": 16,
    "=": 17,
    "-": 18,
    "+": 19,
    "*": 20,
    "@": 21,
    "\\": 22,
    "/": 23,
    "|": 24,
    "?": 25,
    "^": 26,
    "~": 27,
}
SYMBOL_CHARACTERS = "!.,:;()[]{}<>\"'`#$%&=-+*@\\/|?^~"
SYMBOL_PATTERN = compile_pattern(r"[!.,:;()\[\]{}<>\"'`#$%&=\-+*@\\/|?^~]")

# ASCII word characters only, as editors commonly define a word.
TOKEN_PATTERN = compile_pattern(r"\w+", re.ASCII)
# 34 is not prime on purpose: the phi hue rotation repeats similar colours
# with Fibonacci periods (8, 13, 21, 34, ...).
TOKEN_HUE_BUCKETS = 34
TOKEN_HASH_FACTOR = 719

BODY_PATTERN = compile_pattern(BOL + r"([ \t]*)([^ \t\r\n]+)([^\r\n]+)([^ \t\r\n]+)([ \t]*)" + EOL)
BODY_SPACES_PATTERN = compile_pattern(r" {2,}|\t+")
TRAILING_SPACES_PATTERN = compile_pattern(BOL + r"([^\r\n]*[^ \t\r\n]+)([ \t]+)" + EOL)
CURSOR_INDENT_PATTERN = compile_pattern(r"^[ \t]*")


@dataclass(frozen=True)
class CursorContext:
    """The line the cursor sits on and the cursor's column within it."""
    line_text: str = ""
    column: int = 0

    @classmethod
    def at(cls, text: str, position: int) -> "CursorContext":
        """Context for an absolute offset into text."""
        position = max(0, min(position, len(text)))
        line_start = max(text.rfind("\n", 0, position), text.rfind("\r", 0, position)) + 1
        line_end = len(text)
        for terminator in ("\n", "\r"):
            found = text.find(terminator, position)
            if found != -1:
                line_end = min(line_end, found)
        return cls(text[line_start:line_end], position - line_start)

    def indent_width(self, tab_size: int) -> int:
        """Expanded width of the whitespace in front of the cursor on its line."""
        before_cursor = self.line_text[:self.column]
        return effective_width(CURSOR_INDENT_PATTERN.match(before_cursor).group(0), tab_size)

    def strong_tokens(self) -> frozenset:
        return frozenset(match.group(0) for match in find_all(TOKEN_PATTERN, self.line_text))


def token_hash(token: str) -> int:
    """Hue bucket for a token: fold the code points with *719 + c, modulo 34."""
    codes = [ord(ch) for ch in token]
    # Reducing every step keeps the fold linear and gives the same bucket.
    value = codes[0] % TOKEN_HUE_BUCKETS
    for code in codes[1:]:
        value = (value * TOKEN_HASH_FACTOR + code) % TOKEN_HUE_BUCKETS
    return value


def annotate_indents(text, tab_size, cursor, settings):
    return indent_spans(text, tab_size, cursor.indent_width(tab_size), settings)


def annotate_symbols(text, tab_size, cursor, settings):
    return [
        Span(match.start(), 1, settings.hue_style(SYMBOL_HUES[match.group(0)], settings.symbol_alpha))
        for match in find_all(SYMBOL_PATTERN, text)
    ]


def annotate_tokens(text, tab_size, cursor, settings):
    strong_tokens = cursor.strong_tokens()
    spans = []
    for match in find_all(TOKEN_PATTERN, text):
        token = match.group(0)
        alpha = settings.token_active_alpha if token in strong_tokens else settings.token_alpha
        spans.append(Span(match.start(), len(token), settings.hue_style(token_hash(token), alpha)))
    return spans


def annotate_body_spaces(text, tab_size, cursor, settings):
    """Runs of two or more spaces, or of tabs, between the first and last word of a line."""
    spans = []
    for line in find_all(BODY_PATTERN, text):
        prefix = line.group(1) + line.group(2)
        middle = line.group(3)
        for match in find_all(BODY_SPACES_PATTERN, middle):
            column = effective_width(prefix + middle[:match.start()], tab_size)
            width = effective_width(prefix + middle[:match.end()], tab_size) - column
            spans.append(Span(
                line.start() + len(prefix) + match.start(),
                len(match.group(0)),
                settings.hue_style(width - 1, settings.indent_alpha),
            ))
    return spans


def annotate_trailing_spaces(text, tab_size, cursor, settings):
    return [
        Span(match.start(2), len(match.group(2)), ERROR_STYLE)
        for match in find_all(TRAILING_SPACES_PATTERN, text)
    ]


ANNOTATORS = (
    annotate_indents,
    annotate_symbols,
    annotate_tokens,
    annotate_body_spaces,
    annotate_trailing_spaces,
)
