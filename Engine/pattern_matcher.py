"""
Pattern Matcher
Repeated regex scanning over a whole document buffer.
"""

import re

# Line end as the editor sees it: \n, \r\n, \r or end of buffer.
EOL = r"(?=\r\n|\n|\r|\Z)"
# Line start to match: after \n, after a lone \r, or at the start of the buffer.
BOL = r"(?:^|(?<=\r)(?!\n))"


def compile_pattern(pattern, flags=0):
    """Compile a pattern for multiline scanning (already compiled patterns pass through)."""
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern, re.MULTILINE | flags)


def find_all(pattern, text: str) -> list:
    """
    Return every non-overlapping match of pattern in text, in order.

    Empty matches never stall the scan; the next attempt starts one
    position further on.
    """
    return list(compile_pattern(pattern).finditer(text))
