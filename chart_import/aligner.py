"""Windowed monotonic alignment of chart lines to slide lines.

This module matches each parsed chart line to a slide line and projects its
chords and notes onto word starts in the matched slide text.

The matcher is greedy and forward-only: a cursor marks the first slide line
still available, each chart line looks at a small window of slide lines from
the cursor, and an accepted match moves the cursor past the matched line.
Slide lines are never revisited, so chords cannot migrate backwards across
slides.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from chart_import.models import (
    ChartImportNote,
    ChartImportPlacement,
    ChartImportSummary,
    MatchResult,
    ParsedLyricLine,
    SlideLine,
)
from chart_import.similarity import normalize_line, score_candidates
from chart_import.snap import snap_char_index_to_word

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 8
DEFAULT_SHORT_LINE_WORDS = 2
DEFAULT_SHORT_LINE_THRESHOLD = 0.75
DEFAULT_LINE_THRESHOLD = 0.6

UNLINKED_NOTES_WARNING = "Some notes could not be linked to a lyric line."


@dataclass(frozen=True)
class MatchOptions:
    """Settings for matching chart lines to slide lines.

    Parameters
    ----------
    include_notes : bool
        Whether chart comments are linked to slide words.
    window_size : int
        How many slide lines past the cursor a chart line may skip.
    short_line_words : int
        Lines with at most this many words use the short-line threshold.
    short_line_threshold : float
        Minimum score for short lines. Stricter so that one or two words do
        not bind to unrelated short slide text.
    line_threshold : float
        Minimum score for all other lines.

    Raises
    ------
    ValueError
        If the window or word count is negative or a threshold lies outside
        [0, 1].
    """

    include_notes: bool = True
    window_size: int = DEFAULT_WINDOW_SIZE
    short_line_words: int = DEFAULT_SHORT_LINE_WORDS
    short_line_threshold: float = DEFAULT_SHORT_LINE_THRESHOLD
    line_threshold: float = DEFAULT_LINE_THRESHOLD

    def __post_init__(self) -> None:
        if self.window_size < 0:
            msg = f"window_size must be non-negative, got {self.window_size}"
            raise ValueError(msg)
        if self.short_line_words < 0:
            msg = f"short_line_words must be non-negative, got {self.short_line_words}"
            raise ValueError(msg)
        for name in ("short_line_threshold", "line_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                msg = f"{name} must be between 0 and 1, got {value}"
                raise ValueError(msg)

    def threshold_for(self, word_count: int) -> float:
        """Return the acceptance threshold for a line of ``word_count`` words."""
        if word_count <= self.short_line_words:
            return self.short_line_threshold
        return self.line_threshold


def find_best_candidate(
    normalized: str,
    normalized_slides: Sequence[str],
    start: int,
    window_size: int,
) -> tuple[int | None, float]:
    """Find the best-scoring slide line inside the lookahead window.

    The window covers ``start`` through ``start + window_size``, clipped to
    the last slide line. Ties go to the earliest line.

    Parameters
    ----------
    normalized : str
        The normalized chart line.
    normalized_slides : Sequence[str]
        All normalized slide lines.
    start : int
        The cursor: first slide line still available.
    window_size : int
        Lookahead past the cursor.

    Returns
    -------
    tuple[int | None, float]
        Index of the best slide line and its score, or (None, 0.0) if no
        slide line in the window shares anything with the chart line.
    """
    stop = min(len(normalized_slides), start + window_size + 1)
    if start >= stop:
        return None, 0.0

    scores = score_candidates(normalized, normalized_slides[start:stop])
    offset = int(np.argmax(scores))
    best_score = float(scores[offset])
    if best_score <= 0.0:
        return None, 0.0
    return start + offset, best_score


def place_chords(line: ParsedLyricLine, slide: SlideLine) -> list[ChartImportPlacement]:
    """Snap each chord of a matched chart line onto the slide text."""
    text = slide.text
    last_column = max(0, len(text) - 1)
    placements: list[ChartImportPlacement] = []

    for chord in line.chords:
        column = min(max(0, chord.char_index), last_column)
        snapped = snap_char_index_to_word(text, column)
        placements.append(
            ChartImportPlacement(
                slide_id=slide.slide_id,
                line_index=slide.line_index,
                char_index=snapped.start if snapped is not None else column,
                chord=chord.chord,
            )
        )

    return placements


def link_notes(line: ParsedLyricLine, slide: SlideLine) -> list[ChartImportNote] | None:
    """Anchor a chart line's notes to the first word of its slide line.

    Returns
    -------
    list[ChartImportNote] | None
        One note per note text, or None if the slide line has no words.
    """
    word = snap_char_index_to_word(slide.text, 0)
    if word is None:
        return None
    return [
        ChartImportNote(
            text=note,
            slide_id=slide.slide_id,
            line_index=slide.line_index,
            word_start=word.start,
            word_text=word.word,
        )
        for note in line.notes
    ]


def match_parsed_lines_to_slides(
    parsed_lines: Sequence[ParsedLyricLine],
    slide_lines: Sequence[SlideLine],
    options: MatchOptions | None = None,
    *,
    include_notes: bool | None = None,
) -> MatchResult:
    """Match chart lines to slide lines and place their chords and notes.

    Parameters
    ----------
    parsed_lines : Sequence[ParsedLyricLine]
        Lines from the chart parser, in document order.
    slide_lines : Sequence[SlideLine]
        Every slide line of the song, in performance order.
    options : MatchOptions | None
        Matching settings. Defaults to ``MatchOptions()``.
    include_notes : bool | None
        Shortcut overriding ``options.include_notes``.

    Returns
    -------
    MatchResult
        Placements, notes, summary counts, warnings and unmatched lines.

    Examples
    --------
    >>> from chart_import.models import ParsedChord
    >>> parsed = [ParsedLyricLine("Amazing grace, how sweet the sound", (ParsedChord("G", 0),))]
    >>> slides = [SlideLine("s1", 0, "Amazing grace how sweet the sound")]
    >>> result = match_parsed_lines_to_slides(parsed, slides)
    >>> result.placements[0]
    ChartImportPlacement(slide_id='s1', line_index=0, char_index=0, chord='G')
    """
    if options is None:
        options = MatchOptions()
    notes_enabled = options.include_notes if include_notes is None else include_notes

    placements: list[ChartImportPlacement] = []
    notes: list[ChartImportNote] = []
    warnings: list[str] = []
    unmatched: list[str] = []

    normalized_slides = [normalize_line(slide.text) for slide in slide_lines]
    slide_index = 0
    total = 0
    matched = 0

    for line in parsed_lines:
        normalized = normalize_line(line.text)
        if not normalized:
            continue
        total += 1

        best_index, best_score = find_best_candidate(
            normalized, normalized_slides, slide_index, options.window_size
        )
        threshold = options.threshold_for(len(normalized.split()))

        if best_index is None or best_score < threshold:
            logger.debug(
                "No slide line for chart line %d (best %.2f < %.2f): %r",
                line.source_line_index,
                best_score,
                threshold,
                line.text,
            )
            unmatched.append(line.text)
            continue

        slide = slide_lines[best_index]
        slide_index = best_index + 1
        matched += 1
        logger.debug(
            "Chart line %d -> slide %s line %d (score %.2f)",
            line.source_line_index,
            slide.slide_id,
            slide.line_index,
            best_score,
        )

        placements.extend(place_chords(line, slide))

        if notes_enabled and line.notes:
            linked = link_notes(line, slide)
            if linked is None:
                warnings.append(UNLINKED_NOTES_WARNING)
            else:
                notes.extend(linked)

    summary = ChartImportSummary(
        total_lines=total,
        matched_lines=matched,
        unmatched_lines=len(unmatched),
        placement_count=len(placements),
        note_count=len(notes),
    )

    return MatchResult(
        placements=tuple(placements),
        notes=tuple(notes),
        summary=summary,
        warnings=tuple(warnings),
        unmatched_lines=tuple(unmatched),
    )
