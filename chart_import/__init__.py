"""Chord chart import onto slide lyrics.

This library reads the plain text of an uploaded chord chart, finds the
lyric lines and the chords written against them, and matches those lines to
a song's slide lines so the chords land on words of the slide text.

Examples
--------
>>> from chart_import import SlideLine, import_chart

>>> slides = [
...     SlideLine("s1", 0, "Amazing grace how sweet the sound"),
...     SlideLine("s1", 1, "That saved a wretch like me"),
... ]
>>> chart = '''G              C
... Amazing grace, how sweet the sound
... G            D
... That saved a wretch like me'''
>>> result = import_chart(chart, slides)
>>> [(p.line_index, p.char_index, p.chord) for p in result.placements]
[(0, 0, 'G'), (0, 14, 'C'), (1, 0, 'G'), (1, 13, 'D')]
"""

from chart_import.aligner import MatchOptions, match_parsed_lines_to_slides
from chart_import.chords import is_chord_line, is_chord_token, normalize_chord_token
from chart_import.importer import ChartImportError, import_chart, import_chart_file
from chart_import.models import (
    ChartImportNote,
    ChartImportPlacement,
    ChartImportResult,
    ChartImportSummary,
    MatchResult,
    ParsedChord,
    ParsedLyricLine,
    ParseResult,
    Slide,
    SlideGroup,
    SlideLine,
)
from chart_import.parser import parse_chart_text
from chart_import.similarity import line_match_score, normalize_line
from chart_import.slides import build_slide_lines, load_slide_lines_json
from chart_import.snap import snap_char_index_to_word

__all__ = [
    "ChartImportError",
    "ChartImportNote",
    "ChartImportPlacement",
    "ChartImportResult",
    "ChartImportSummary",
    "MatchOptions",
    "MatchResult",
    "ParseResult",
    "ParsedChord",
    "ParsedLyricLine",
    "Slide",
    "SlideGroup",
    "SlideLine",
    "build_slide_lines",
    "import_chart",
    "import_chart_file",
    "is_chord_line",
    "is_chord_token",
    "line_match_score",
    "load_slide_lines_json",
    "match_parsed_lines_to_slides",
    "normalize_chord_token",
    "normalize_line",
    "parse_chart_text",
    "snap_char_index_to_word",
]
