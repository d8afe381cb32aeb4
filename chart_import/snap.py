"""Word-snap projection of chord columns onto slide text.

A chord column taken from the uploaded chart rarely lines up with the slide
text character for character. Snapping moves it to the start of the nearest
word, so a placement never splits a word or points at whitespace.
"""

from __future__ import annotations

from chart_import.models import SnappedWord, Word
from chart_import.tokenizer import tokenize_line


def find_word_at(words: list[Word], char_index: int) -> Word | None:
    """Find the word whose span contains ``char_index``."""
    for word in words:
        if word.start <= char_index < word.end:
            return word
    return None


def find_next_word(words: list[Word], char_index: int) -> Word | None:
    """Find the first word starting at or after ``char_index``."""
    for word in words:
        if word.start >= char_index:
            return word
    return None


def snap_char_index_to_word(text: str, char_index: int) -> SnappedWord | None:
    """Project a column onto the start of a word in ``text``.

    Strategy:
    1. If the column falls inside a word, use that word
    2. Otherwise use the first word starting after the column
    3. If no word follows, use the last word
    4. If the text has no words at all, there is nothing to snap to

    Parameters
    ----------
    text : str
        The slide line text.
    char_index : int
        The column to project.

    Returns
    -------
    SnappedWord | None
        Start offset and text of the chosen word, or None for a line with no
        words.

    Examples
    --------
    >>> snap_char_index_to_word("Amazing grace", 3)
    SnappedWord(start=0, word='Amazing')
    >>> snap_char_index_to_word("Amazing grace", 7)
    SnappedWord(start=8, word='grace')
    >>> snap_char_index_to_word("Amazing grace   ", 15)
    SnappedWord(start=8, word='grace')
    >>> snap_char_index_to_word("   ", 1) is None
    True
    """
    words = tokenize_line(text)
    if not words:
        return None

    word = find_word_at(words, char_index) or find_next_word(words, char_index) or words[-1]
    return SnappedWord(start=word.start, word=word.text)
