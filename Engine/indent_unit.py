"""
Indent-Unit Inference
Decides which whitespace step a document indents with.
"""

from dataclasses import dataclass
from functools import reduce
from math import ceil, gcd

from Engine.indent_size import effective_width

# Heuristic constants; unit inference results depend on them exactly.
OUTLIER_DIVISOR = 10
MAX_RANKED_WIDTHS = 10


@dataclass(frozen=True)
class IndentUnit:
    """The atomic indentation step of a document."""
    character: str
    unit_string: str
    unit_width: int

    @property
    def is_space(self) -> bool:
        return self.character == " "

    def depth_of(self, width: int) -> int:
        """Nesting depth that an indent of the given column width reaches."""
        return width // self.unit_width

    def steps_for(self, width: int) -> int:
        """Number of unit steps needed to cover width columns."""
        return ceil(width / self.unit_width)


def is_space_indented(total_tabs: int, total_spaces: int, tab_size: int) -> bool:
    """True when the spaces outweigh the tabs (tabs weighted by tab size)."""
    return total_tabs * tab_size <= total_spaces


def rank_distribution(distribution: dict) -> list:
    """(width, count) pairs by descending count; equal counts keep ascending width."""
    by_width = sorted(distribution.items())
    return sorted(by_width, key=lambda item: item[1], reverse=True)


def infer_unit_width(distribution: dict, tab_size: int) -> int:
    """
    Width of one space-indent step.

    With a single observed width that width is the unit. With several, the
    widths counted more than a tenth as often as the most common one (at most
    the ten most common) are reduced to their greatest common divisor, so a
    few continuation lines or stray widths do not shrink the unit. An empty
    distribution falls back to the tab size.
    """
    ranked = rank_distribution(distribution)
    if not ranked:
        return tab_size
    if len(ranked) == 1:
        return ranked[0][0]
    failing_line = ranked[0][1] / OUTLIER_DIVISOR
    widths = [
        width
        for index, (width, count) in enumerate(ranked)
        if failing_line < count and index < MAX_RANKED_WIDTHS
    ]
    return reduce(gcd, widths)


def infer_indent_unit(distribution: dict, tab_size: int, space_indented: bool) -> IndentUnit:
    """Build the IndentUnit for a document from its width distribution."""
    if space_indented:
        unit_string = " " * infer_unit_width(distribution, tab_size)
        return IndentUnit(" ", unit_string, effective_width(unit_string, tab_size))
    return IndentUnit("\t", "\t", effective_width("\t", tab_size))
