"""Data models for chord chart import.

This module defines the records that flow through the import pipeline:
parsed lyric lines coming out of the chart parser, the slide lines they are
matched against, and the placements, notes and summary produced by the
aligner. Output records serialize to the camelCase wire shape via
``to_dict()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ParsedChord:
    """A chord symbol found in the uploaded chart.

    Parameters
    ----------
    chord : str
        The chord text as written (e.g., "G", "D/F#").
    char_index : int
        Column of the chord within the lyric text it belongs to.
    """

    chord: str
    char_index: int

    def to_dict(self) -> dict[str, Any]:
        return {"chord": self.chord, "charIndex": self.char_index}


@dataclass(frozen=True)
class ParsedLyricLine:
    """A lyric line from the chart with its chords and pending notes.

    Parameters
    ----------
    text : str
        The lyric text, with inline chord brackets removed.
    chords : tuple[ParsedChord, ...]
        Chords in the order they were written. May be empty.
    notes : tuple[str, ...]
        Comment lines that preceded this lyric line.
    source_line_index : int
        0-based index of the lyric line in the raw input.

    Examples
    --------
    >>> line = ParsedLyricLine("Amazing grace", (ParsedChord("G", 0),), (), 3)
    >>> line.chords[0].chord
    'G'
    """

    text: str
    chords: tuple[ParsedChord, ...] = ()
    notes: tuple[str, ...] = ()
    source_line_index: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "chords": [c.to_dict() for c in self.chords],
            "notes": list(self.notes),
            "sourceLineIndex": self.source_line_index,
        }


@dataclass(frozen=True)
class SlideLine:
    """One physical lyric line of a slide.

    Parameters
    ----------
    slide_id : str
        Identifier of the slide the line belongs to.
    line_index : int
        Position of the line within its slide.
    text : str
        The line text as stored on the slide.
    """

    slide_id: str
    line_index: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"slideId": self.slide_id, "lineIndex": self.line_index, "text": self.text}


@dataclass(frozen=True)
class ChartImportPlacement:
    """A chord bound to a word start within a slide line.

    Parameters
    ----------
    slide_id : str
        Slide the chord lands on.
    line_index : int
        Line within the slide.
    char_index : int
        Start offset of the word the chord sits above.
    chord : str
        The chord text.
    """

    slide_id: str
    line_index: int
    char_index: int
    chord: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "slideId": self.slide_id,
            "lineIndex": self.line_index,
            "charIndex": self.char_index,
            "chord": self.chord,
        }


@dataclass(frozen=True)
class ChartImportNote:
    """A chart comment anchored to the first word of a slide line.

    Parameters
    ----------
    text : str
        The note text with its comment marker removed.
    slide_id : str
        Slide the note is linked to.
    line_index : int
        Line within the slide.
    word_start : int
        Start offset of the anchor word.
    word_text : str
        The anchor word itself.
    """

    text: str
    slide_id: str
    line_index: int
    word_start: int
    word_text: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "slideId": self.slide_id,
            "lineIndex": self.line_index,
            "wordStart": self.word_start,
            "wordText": self.word_text,
        }


@dataclass(frozen=True)
class ChartImportSummary:
    """Aggregate counts for one import."""

    total_lines: int
    matched_lines: int
    unmatched_lines: int
    placement_count: int
    note_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalLines": self.total_lines,
            "matchedLines": self.matched_lines,
            "unmatchedLines": self.unmatched_lines,
            "placementCount": self.placement_count,
            "noteCount": self.note_count,
        }


@dataclass(frozen=True)
class ParseResult:
    """Output of the chart parser.

    Parameters
    ----------
    lines : tuple[ParsedLyricLine, ...]
        Lyric lines in document order.
    warnings : tuple[str, ...]
        Problems found while parsing.
    """

    lines: tuple[ParsedLyricLine, ...]
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines": [line.to_dict() for line in self.lines],
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class MatchResult:
    """Output of matching parsed lines against slide lines.

    Parameters
    ----------
    placements : tuple[ChartImportPlacement, ...]
        Chord placements in match order.
    notes : tuple[ChartImportNote, ...]
        Linked notes in match order.
    summary : ChartImportSummary
        Line and output counts.
    warnings : tuple[str, ...]
        Problems found while matching.
    unmatched_lines : tuple[str, ...]
        Original text of every parsed line that found no slide line.
    """

    placements: tuple[ChartImportPlacement, ...]
    notes: tuple[ChartImportNote, ...]
    summary: ChartImportSummary
    warnings: tuple[str, ...] = ()
    unmatched_lines: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "placements": [p.to_dict() for p in self.placements],
            "notes": [n.to_dict() for n in self.notes],
            "summary": self.summary.to_dict(),
            "warnings": list(self.warnings),
            "unmatchedLines": list(self.unmatched_lines),
        }


@dataclass(frozen=True)
class ChartImportResult(MatchResult):
    """Match result with extraction, parse and presentation warnings merged."""


@dataclass(frozen=True)
class Word:
    """A maximal non-whitespace run with its column span.

    Parameters
    ----------
    text : str
        The run's characters.
    start : int
        Inclusive start column (0-indexed).
    end : int
        Exclusive end column.
    """

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class SnappedWord:
    """Result of projecting an offset onto a word start."""

    start: int
    word: str


@dataclass(frozen=True)
class SlideGroup:
    """A group of slides (e.g., one verse) in its default song position."""

    id: str
    position: int


@dataclass(frozen=True)
class Slide:
    """A stored slide.

    Parameters
    ----------
    id : str
        Slide identifier.
    group_id : str
        The slide group it belongs to.
    lines : tuple[str, ...] | None
        The slide's lyric lines, or None when the slide has no stored text.
    position : int
        Order of the slide within its group.
    """

    id: str
    group_id: str
    lines: tuple[str, ...] | None
    position: int
