"""Chart import service.

This module wires the parser and aligner together the way a request handler
uses them: it rejects requests that cannot produce anything, runs the
pipeline, and adds the user-facing warnings derived from the match result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from chart_import.aligner import MatchOptions, match_parsed_lines_to_slides
from chart_import.models import ChartImportResult, SlideLine
from chart_import.parser import parse_chart_text
from chart_import.text import decode_text

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".txt",)

UNMATCHED_LINES_WARNING = "Some lyric lines could not be matched to slides."
NO_PLACEMENTS_WARNING = "No chord placements were detected in the uploaded file."


class ChartImportError(ValueError):
    """Raised when a chart import request cannot be processed."""


def import_chart(
    text: str,
    slide_lines: Sequence[SlideLine],
    include_notes: bool | None = None,
    extraction_warning: str | None = None,
    options: MatchOptions | None = None,
) -> ChartImportResult:
    """Import a chord chart onto a song's slide lines.

    Parameters
    ----------
    text : str
        Plain text of the uploaded chart.
    slide_lines : Sequence[SlideLine]
        The song's slide lines in performance order.
    include_notes : bool | None
        Whether chart comments become linked notes. None defers to
        ``options.include_notes``, which defaults to True.
    extraction_warning : str | None
        Warning from the text extraction step, listed first.
    options : MatchOptions | None
        Matching settings. An explicit ``include_notes`` takes precedence
        over ``options.include_notes``.

    Returns
    -------
    ChartImportResult
        Placements, notes, summary, all warnings and unmatched lines.

    Raises
    ------
    ChartImportError
        If there are no slide lines or the text is blank.
    """
    if not slide_lines:
        msg = "No slide content available for this song"
        raise ChartImportError(msg)
    if not text.strip():
        msg = "No text could be extracted from the file"
        raise ChartImportError(msg)

    parse_result = parse_chart_text(text)
    match_result = match_parsed_lines_to_slides(
        parse_result.lines, slide_lines, options, include_notes=include_notes
    )

    warnings: list[str] = []
    if extraction_warning:
        warnings.append(extraction_warning)
    warnings.extend(parse_result.warnings)
    warnings.extend(match_result.warnings)
    if match_result.unmatched_lines:
        warnings.append(UNMATCHED_LINES_WARNING)
    if not match_result.placements:
        warnings.append(NO_PLACEMENTS_WARNING)

    summary = match_result.summary
    logger.info(
        "Chart import matched %d/%d lines: %d placements, %d notes",
        summary.matched_lines,
        summary.total_lines,
        summary.placement_count,
        summary.note_count,
    )

    return ChartImportResult(
        placements=match_result.placements,
        notes=match_result.notes,
        summary=summary,
        warnings=tuple(warnings),
        unmatched_lines=match_result.unmatched_lines,
    )


def import_chart_file(
    path: str | Path,
    slide_lines: Sequence[SlideLine],
    include_notes: bool | None = None,
    options: MatchOptions | None = None,
) -> ChartImportResult:
    """Import a chord chart from a plain-text file.

    Raises
    ------
    ChartImportError
        If the file type is not supported, or as :func:`import_chart`.
    """
    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        supported = ", ".join(ext.lstrip(".") for ext in SUPPORTED_EXTENSIONS)
        msg = f"Unsupported file type. Supported formats: {supported}"
        raise ChartImportError(msg)

    decoded = decode_text(path.read_bytes())
    return import_chart(
        decoded.text,
        slide_lines,
        include_notes=include_notes,
        extraction_warning=decoded.warning,
        options=options,
    )
