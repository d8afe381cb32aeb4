"""Chord chart text parser.

This module turns the plain text of an uploaded chord chart into lyric lines
carrying their chords and any comment notes written above them. Three chart
styles are understood, and may be mixed in one file:

- inline chords in brackets: ``I [C]love you [G]Lord``
- a chord row above the lyric it belongs to::

      C        G
      I love you Lord

- plain lyric lines with no chords

Section headers (``Verse 1``, ``Chorus``, ...) are dropped and comment lines
(``Note: ...``, ``{c: ...}``, ``* ...``, ``// ...``) are attached to the next
lyric line.
"""

from __future__ import annotations

import logging
import re
from typing import Literal

from chart_import.chords import is_chord_line, is_chord_token, parse_chord_positions
from chart_import.models import ParsedChord, ParsedLyricLine, ParseResult
from chart_import.text import normalize_line_endings

logger = logging.getLogger(__name__)

HEADER_LABELS: frozenset[str] = frozenset(
    {
        "verse",
        "chorus",
        "bridge",
        "pre-chorus",
        "prechorus",
        "intro",
        "outro",
        "tag",
        "interlude",
    }
)

NOTE_PREFIXES: tuple[str, ...] = ("note:", "notes:", "comment:", "comments:")

BRACE_COMMENT_RE = re.compile(r"^\{(?:comment|c):", re.IGNORECASE)
HEADER_STRIP_RE = re.compile(r"[^a-zA-Z-]")
INLINE_CHORD_RE = re.compile(r"\[([^\]]+)\]")

UNATTACHED_NOTES_WARNING = "Some notes were not attached to a lyric line."

LineKind = Literal["blank", "note", "header", "inline", "chord_row", "lyric"]


def preprocess(text: str) -> list[str]:
    """Split input text into lines after normalizing line endings."""
    return normalize_line_endings(text).split("\n")


def extract_note_text(line: str) -> str | None:
    """Extract the note from a comment line.

    Parameters
    ----------
    line : str
        The line to check.

    Returns
    -------
    str | None
        The note text with its marker removed, or None if the line is not a
        comment. A marker with nothing after it yields the whole line.

    Examples
    --------
    >>> extract_note_text("Note: slow down")
    'slow down'
    >>> extract_note_text("{c: Key change}")
    'Key change'
    >>> extract_note_text("// tacet")
    'tacet'
    >>> extract_note_text("Jesus loves me")
    """
    trimmed = line.strip()
    if not trimmed:
        return None

    lower = trimmed.lower()
    for prefix in NOTE_PREFIXES:
        if lower.startswith(prefix):
            return trimmed[len(prefix) :].strip() or trimmed

    if lower.startswith(("{comment:", "{c:")):
        content = BRACE_COMMENT_RE.sub("", trimmed)
        content = content.removesuffix("}").strip()
        return content or trimmed

    if trimmed.startswith("*"):
        return trimmed[1:].strip() or trimmed

    if trimmed.startswith("//"):
        return trimmed[2:].strip() or trimmed

    return None


def is_header_line(line: str) -> bool:
    """Check whether a line is a section header such as ``Verse 2:``.

    Examples
    --------
    >>> is_header_line("Verse 1")
    True
    >>> is_header_line("[Pre-Chorus]")
    True
    >>> is_header_line("Chorus of angels")
    False
    """
    cleaned = HEADER_STRIP_RE.sub("", line).lower()
    return cleaned in HEADER_LABELS


def has_inline_chords(line: str) -> bool:
    """Check whether a line carries ``[chord]`` annotations."""
    return INLINE_CHORD_RE.search(line) is not None


def parse_inline_chord_line(line: str) -> tuple[str, list[ParsedChord]]:
    """Remove bracketed chords from a line and record where they sat.

    Each chord's column is measured in the text left after all brackets are
    removed. Bracketed text that is not chord-shaped is removed as well but
    not kept as a chord.

    Parameters
    ----------
    line : str
        The line with inline chords.

    Returns
    -------
    tuple[str, list[ParsedChord]]
        The lyric text and its chords.

    Examples
    --------
    >>> text, chords = parse_inline_chord_line("I [C]love you [G]Lord")
    >>> text
    'I love you Lord'
    >>> [(c.chord, c.char_index) for c in chords]
    [('C', 2), ('G', 11)]
    """
    chords: list[ParsedChord] = []
    parts: list[str] = []
    length = 0
    last = 0

    for match in INLINE_CHORD_RE.finditer(line):
        segment = line[last : match.start()]
        parts.append(segment)
        length += len(segment)

        chord_text = match.group(1).strip()
        if chord_text and is_chord_token(chord_text):
            chords.append(ParsedChord(chord=chord_text, char_index=length))
        last = match.end()

    parts.append(line[last:])
    return "".join(parts), chords


def classify_line(line: str) -> LineKind:
    """Classify a chart line.

    Checks run in priority order: comment notes, section headers, inline
    chords, chord rows, and finally plain lyrics.

    Examples
    --------
    >>> classify_line("")
    'blank'
    >>> classify_line("Chorus")
    'header'
    >>> classify_line("C G Am F")
    'chord_row'
    >>> classify_line("I [C]love you")
    'inline'
    """
    stripped = line.strip()
    if not stripped:
        return "blank"
    if extract_note_text(stripped) is not None:
        return "note"
    if is_header_line(stripped):
        return "header"
    if has_inline_chords(stripped):
        return "inline"
    if is_chord_line(stripped):
        return "chord_row"
    return "lyric"


def find_next_nonblank(lines: list[str], start: int) -> int | None:
    """Return the index of the first non-blank line at or after ``start``."""
    for index in range(start, len(lines)):
        if lines[index].strip():
            return index
    return None


def pair_chord_row(lines: list[str], index: int) -> int | None:
    """Find the lyric line a chord row describes.

    Blank lines are skipped. The next line qualifies unless it is itself a
    chord row or a section header.

    Parameters
    ----------
    lines : list[str]
        All input lines.
    index : int
        Index of the chord row.

    Returns
    -------
    int | None
        Index of the paired lyric line, or None if the row stands alone.
    """
    next_index = find_next_nonblank(lines, index + 1)
    if next_index is None:
        return None
    next_line = lines[next_index].strip()
    if is_chord_line(next_line) or is_header_line(next_line):
        return None
    return next_index


def parse_chart_text(text: str) -> ParseResult:
    """Parse chord chart text into lyric lines.

    This is the main entry point for chart parsing. Lines are walked by
    index: a chord row consumes the lyric line it is paired with, so the
    index can jump forward by more than one.

    Parameters
    ----------
    text : str
        Plain text of the uploaded chart.

    Returns
    -------
    ParseResult
        Lyric lines in document order plus any warnings.

    Examples
    --------
    >>> result = parse_chart_text("Verse 1\\nNote: slow down\\nJesus loves me")
    >>> [(line.text, line.notes) for line in result.lines]
    [('Jesus loves me', ('slow down',))]
    """
    lines = preprocess(text)
    parsed: list[ParsedLyricLine] = []
    warnings: list[str] = []
    pending_notes: list[str] = []

    def emit(lyric: str, chords: list[ParsedChord], source_index: int) -> None:
        parsed.append(
            ParsedLyricLine(
                text=lyric,
                chords=tuple(chords),
                notes=tuple(pending_notes),
                source_line_index=source_index,
            )
        )
        pending_notes.clear()

    i = 0
    n = len(lines)

    while i < n:
        line = lines[i].rstrip()
        kind = classify_line(line)

        if kind == "blank" or kind == "header":
            i += 1
            continue

        if kind == "note":
            note = extract_note_text(line)
            if note is not None:
                pending_notes.append(note)
            i += 1
            continue

        if kind == "inline":
            lyric, chords = parse_inline_chord_line(line)
            # A line of nothing but chords carries no lyric to match
            if lyric.strip():
                emit(lyric, chords, i)
            i += 1
            continue

        if kind == "chord_row":
            lyric_index = pair_chord_row(lines, i)
            if lyric_index is not None:
                logger.debug("Paired chord row %d with line %d", i, lyric_index)
                emit(lines[lyric_index].rstrip(), parse_chord_positions(line), lyric_index)
                i = lyric_index + 1
                continue
            logger.debug("Chord row %d has no lyric line to pair with", i)

        emit(line, [], i)
        i += 1

    if pending_notes:
        warnings.append(UNATTACHED_NOTES_WARNING)

    logger.debug("Parsed %d lyric lines from %d input lines", len(parsed), n)
    return ParseResult(lines=tuple(parsed), warnings=tuple(warnings))
