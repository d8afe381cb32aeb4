"""Column-aware tokenizer for chart and slide lines.

Chord rows are read by column and chords are snapped to words by column, so
every token keeps the span it occupied in the original line.
"""

from __future__ import annotations

import re

from chart_import.models import Word

WORD_RE = re.compile(r"\S+")


def tokenize_line(line: str) -> list[Word]:
    """Split a line into maximal non-whitespace runs.

    The line is not stripped, so spans index into the line exactly as given.

    Parameters
    ----------
    line : str
        The line to tokenize. Should not include newline characters.

    Returns
    -------
    list[Word]
        Runs with text, start (inclusive) and end (exclusive).

    Examples
    --------
    >>> [(w.text, w.start, w.end) for w in tokenize_line("G     C")]
    [('G', 0, 1), ('C', 6, 7)]

    >>> [(w.text, w.start, w.end) for w in tokenize_line("  Amazing  grace")]
    [('Amazing', 2, 9), ('grace', 11, 16)]
    """
    return [Word(text=m.group(0), start=m.start(), end=m.end()) for m in WORD_RE.finditer(line)]
