"""
Decoration Aggregator
Groups every annotator's spans by style key and hands each group to the
host renderer under one handle per key.
"""

from dataclasses import dataclass, field

from Engine.span_annotators import ANNOTATORS, CursorContext


def compute_spans(text: str, tab_size: int, cursor: CursorContext, settings, annotators=ANNOTATORS) -> dict:
    """Run every annotator over text and return {style key: [spans]} for this pass."""
    spans_by_style = {}
    for annotate in annotators:
        for span in annotate(text, tab_size, cursor, settings):
            spans_by_style.setdefault(span.style, []).append(span)
    return spans_by_style


@dataclass
class DecorationGroup:
    handle: object
    spans: list = field(default_factory=list)


class DecorationAggregator:
    """
    Keeps one renderer handle per style key for the lifetime of a configuration.

    create_handle(style) builds a renderer handle for an unseen key;
    apply_spans(handle, spans) renders a group. Handles must offer dispose().
    """

    def __init__(self, create_handle, apply_spans, annotators=ANNOTATORS):
        self.create_handle = create_handle
        self.apply_spans = apply_spans
        self.annotators = annotators
        self.groups = {}

    def update(self, text: str, tab_size: int, cursor: CursorContext, settings) -> dict:
        """Recompute every span from scratch and render all groups."""
        spans_by_style = compute_spans(text, tab_size, cursor, settings, self.annotators)
        # Keys missing from this pass keep their handle but render nothing.
        for group in self.groups.values():
            group.spans = []
        for style, spans in spans_by_style.items():
            group = self.groups.get(style)
            if group is None:
                group = self.groups[style] = DecorationGroup(self.create_handle(style))
            group.spans = spans
        for group in self.groups.values():
            self.apply_spans(group.handle, group.spans)
        return spans_by_style

    def reset(self):
        """Dispose every handle; the next update starts with no groups."""
        groups, self.groups = self.groups, {}
        for group in groups.values():
            group.handle.dispose()
