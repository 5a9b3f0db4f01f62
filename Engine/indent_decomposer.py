"""
Indent Decomposer
Splits every indented line into one span per indent unit, with error
spans for whitespace that does not fit the document's unit.
"""

from collections import Counter
from dataclasses import dataclass, field

from Engine.indent_size import effective_width
from Engine.indent_unit import IndentUnit, infer_indent_unit, is_space_indented
from Engine.pattern_matcher import BOL, EOL, compile_pattern, find_all
from Engine.style_keys import ERROR_STYLE, DecorationSettings, Span

INDENT_PATTERN = compile_pattern(BOL + r"([ \t]+)([^\r\n]*)" + EOL)
LEADING_SPACES_PATTERN = compile_pattern(r"^ +")


@dataclass(frozen=True)
class IndentLine:
    offset: int
    indent_text: str
    body: str


@dataclass
class IndentScan:
    """Indented lines of one document plus the statistics unit inference needs."""
    lines: list = field(default_factory=list)
    distribution: Counter = field(default_factory=Counter)
    total_tabs: int = 0
    total_spaces: int = 0

    def infer_unit(self, tab_size: int) -> IndentUnit:
        space_indented = is_space_indented(self.total_tabs, self.total_spaces, tab_size)
        return infer_indent_unit(dict(self.distribution), tab_size, space_indented)


def scan_indents(text: str, tab_size: int) -> IndentScan:
    """Collect every line with leading whitespace (whitespace-only lines included)."""
    scan = IndentScan()
    for match in find_all(INDENT_PATTERN, text):
        indent_text = match.group(1)
        scan.lines.append(IndentLine(match.start(), indent_text, match.group(2)))
        tabs = indent_text.count("\t")
        scan.total_tabs += tabs
        scan.total_spaces += len(indent_text) - tabs
        scan.distribution[effective_width(indent_text, tab_size)] += 1
    return scan


def _leading_spaces(text: str) -> int:
    match = LEADING_SPACES_PATTERN.match(text)
    return match.end() if match else 0


def decompose(line: IndentLine, unit: IndentUnit, tab_size: int):
    """
    Yield (start, length, depth) pieces for one line's indent; depth is None for errors.

    Whole units are consumed greedily from the front. A remainder narrower
    than one unit is a single error. Otherwise the offending characters are
    reported on their own and the depth counter jumps ahead to the column
    they reach, so the units after them keep plausible depths.
    """
    text = line.indent_text
    cursor = line.offset
    length = 0
    depth = 0
    while text:
        cursor += length
        if text.startswith(unit.unit_string):
            length = len(unit.unit_string)
            yield cursor, length, depth
            text = text[length:]
        elif effective_width(text, tab_size) < unit.unit_width:
            length = len(text)
            yield cursor, length, None
            text = ""
        elif unit.is_space:
            spaces = _leading_spaces(text)
            if 0 < spaces:
                yield cursor, spaces, depth
                cursor += spaces
            length = 1
            yield cursor, length, None
            depth += unit.steps_for(effective_width(text[:spaces + 1], tab_size)) - 1
            text = text[spaces + 1:]
        else:
            # Tab indentation: the run of spaces in front of the next tab is the error.
            spaces = _leading_spaces(text)
            length = spaces
            yield cursor, length, None
            depth += unit.steps_for(spaces) - 1
            text = text[spaces:]
        depth += 1


def indent_spans(text: str, tab_size: int, cursor_indent_width: int, settings: DecorationSettings) -> list:
    """Spans for every indented line; the cursor's own depth gets the active alpha."""
    scan = scan_indents(text, tab_size)
    unit = scan.infer_unit(tab_size)
    cursor_depth = unit.depth_of(cursor_indent_width)
    spans = []
    for line in scan.lines:
        for start, length, depth in decompose(line, unit, tab_size):
            if depth is None:
                spans.append(Span(start, length, ERROR_STYLE))
            else:
                alpha = settings.indent_active_alpha if depth == cursor_depth else settings.indent_alpha
                spans.append(Span(start, length, settings.hue_style(depth, alpha)))
    return spans
