"""Tests for the chord chart parser."""

from pathlib import Path

import pytest

from chart_import.parser import (
    UNATTACHED_NOTES_WARNING,
    classify_line,
    extract_note_text,
    is_header_line,
    parse_chart_text,
    parse_inline_chord_line,
)

TESTDATA_DIR = Path(__file__).parent.parent / "testdata"


def chord_pairs(line) -> list[tuple[str, int]]:
    return [(c.chord, c.char_index) for c in line.chords]


class TestExtractNoteText:
    """Test comment-line detection."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("Note: slow down", "slow down"),
            ("NOTES: softly", "softly"),
            ("comment: key change", "key change"),
            ("Comments: all sing", "all sing"),
            ("{comment: Capo 2}", "Capo 2"),
            ("{c: Capo 2}", "Capo 2"),
            ("{C:Build}", "Build"),
            ("* ritard", "ritard"),
            ("// tacet", "tacet"),
            ("   Note:   padded   ", "padded"),
        ],
    )
    def test_note_markers(self, line: str, expected: str) -> None:
        """Test that each marker is stripped."""
        assert extract_note_text(line) == expected

    @pytest.mark.parametrize("line", ["Note:", "*", "//", "{c:}"])
    def test_empty_note_keeps_line(self, line: str) -> None:
        """Test that a bare marker is kept as the note text."""
        assert extract_note_text(line) == line

    @pytest.mark.parametrize("line", ["Jesus loves me", "", "   ", "Notebook of mine"])
    def test_not_a_note(self, line: str) -> None:
        """Test that ordinary lines are not notes."""
        assert extract_note_text(line) is None


class TestIsHeaderLine:
    """Test section-header detection."""

    @pytest.mark.parametrize(
        "line",
        [
            "Verse",
            "Verse 1",
            "VERSE 2:",
            "Chorus",
            "[Chorus]",
            "Pre-Chorus",
            "PreChorus",
            "Tag",
            "Intro",
            "Outro",
            "Interlude",
        ],
    )
    def test_headers(self, line: str) -> None:
        """Test known section labels."""
        assert is_header_line(line) is True

    @pytest.mark.parametrize("line", ["Chorus of angels", "Verses", "Jesus loves me", ""])
    def test_non_headers(self, line: str) -> None:
        """Test that lyrics mentioning a label are not headers."""
        assert is_header_line(line) is False


class TestParseInlineChordLine:
    """Test bracketed chord extraction."""

    def test_offsets_after_bracket_removal(self) -> None:
        """Test offsets are measured in the text without brackets."""
        text, chords = parse_inline_chord_line("I [C]love you [G]Lord")
        assert text == "I love you Lord"
        assert [(c.chord, c.char_index) for c in chords] == [("C", 2), ("G", 11)]

    def test_chord_at_start(self) -> None:
        """Test a chord before the first word."""
        text, chords = parse_inline_chord_line("[G]Amazing grace")
        assert text == "Amazing grace"
        assert [(c.chord, c.char_index) for c in chords] == [("G", 0)]

    def test_non_chord_bracket_dropped(self) -> None:
        """Test that bracketed non-chords are removed without a chord."""
        text, chords = parse_inline_chord_line("[x2]Sing it [D]again")
        assert text == "Sing it again"
        assert [(c.chord, c.char_index) for c in chords] == [("D", 8)]

    def test_bracket_content_trimmed(self) -> None:
        """Test that whitespace inside brackets is ignored."""
        _, chords = parse_inline_chord_line("[ Am7 ]Holy")
        assert [c.chord for c in chords] == ["Am7"]

    def test_adjacent_chords(self) -> None:
        """Test two chords on the same column."""
        text, chords = parse_inline_chord_line("[G][D/F#]Hosanna")
        assert text == "Hosanna"
        assert [(c.chord, c.char_index) for c in chords] == [("G", 0), ("D/F#", 0)]


class TestClassifyLine:
    """Test line classification order."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("", "blank"),
            ("   ", "blank"),
            ("Note: hi", "note"),
            ("Chorus", "header"),
            ("[Chorus]", "header"),
            ("I [C]love you", "inline"),
            ("C G Am F", "chord_row"),
            ("Jesus loves me", "lyric"),
        ],
    )
    def test_classify(self, line: str, expected: str) -> None:
        """Test each line kind."""
        assert classify_line(line) == expected


class TestParseChartText:
    """Test the full parser."""

    def test_empty_input(self) -> None:
        """Test that empty text yields nothing."""
        result = parse_chart_text("")
        assert result.lines == ()
        assert result.warnings == ()

    def test_header_and_note(self) -> None:
        """Test that headers are dropped and notes attach to the next lyric."""
        result = parse_chart_text("Verse 1\nNote: slow down\nJesus loves me")
        assert len(result.lines) == 1
        line = result.lines[0]
        assert line.text == "Jesus loves me"
        assert line.notes == ("slow down",)
        assert line.chords == ()
        assert line.source_line_index == 2

    def test_inline_line(self) -> None:
        """Test a single inline-chord line."""
        result = parse_chart_text("I [C]love you [G]Lord")
        assert len(result.lines) == 1
        assert result.lines[0].text == "I love you Lord"
        assert chord_pairs(result.lines[0]) == [("C", 2), ("G", 11)]

    def test_chord_row_pairs_with_next_line(self) -> None:
        """Test that a chord row is attached to the lyric below it."""
        result = parse_chart_text("C G Am F\nJesus loves me this I know")
        assert len(result.lines) == 1
        line = result.lines[0]
        assert line.text == "Jesus loves me this I know"
        assert chord_pairs(line) == [("C", 0), ("G", 2), ("Am", 4), ("F", 7)]
        assert line.source_line_index == 1

    def test_chord_row_skips_blank_lines(self) -> None:
        """Test that blank lines between a chord row and its lyric are skipped."""
        result = parse_chart_text("G   D\n\n\nJesus loves me")
        assert len(result.lines) == 1
        assert result.lines[0].source_line_index == 3
        assert chord_pairs(result.lines[0]) == [("G", 0), ("D", 4)]

    def test_chord_row_before_header_falls_through(self) -> None:
        """Test that a chord row followed by a header is kept as a plain line."""
        result = parse_chart_text("G C D G\nChorus\nJesus loves me")
        assert [line.text for line in result.lines] == ["G C D G", "Jesus loves me"]
        assert result.lines[0].chords == ()

    def test_chord_row_at_end_falls_through(self) -> None:
        """Test that a trailing chord row is kept as a plain line."""
        result = parse_chart_text("Jesus loves me\nG C D G")
        assert [line.text for line in result.lines] == ["Jesus loves me", "G C D G"]
        assert result.lines[1].chords == ()

    def test_consecutive_chord_rows(self) -> None:
        """Test two chord rows in a row before a lyric.

        The first row cannot pair with another chord row, so it is kept as a
        plain line; the second row pairs with the lyric.
        """
        result = parse_chart_text("G  C  D  G\nEm  C  D\nJesus loves me")
        assert len(result.lines) == 2
        first, second = result.lines
        assert first.text == "G  C  D  G"
        assert first.chords == ()
        assert first.source_line_index == 0
        assert second.text == "Jesus loves me"
        assert chord_pairs(second) == [("Em", 0), ("C", 4), ("D", 7)]
        assert second.source_line_index == 2

    def test_notes_accumulate(self) -> None:
        """Test that consecutive notes all attach to the next lyric."""
        result = parse_chart_text("Note: one\n* two\n\n// three\nJesus loves me\nThis I know")
        assert result.lines[0].notes == ("one", "two", "three")
        assert result.lines[1].notes == ()

    def test_notes_survive_headers(self) -> None:
        """Test that a header between a note and its lyric does not clear the note."""
        result = parse_chart_text("Note: softly\nChorus\nJesus loves me")
        assert result.lines[0].notes == ("softly",)

    def test_notes_attach_to_chord_row_lyric(self) -> None:
        """Test that notes flush into a paired chord-row lyric."""
        result = parse_chart_text("{c: Capo 3}\nG    D\nJesus loves me")
        assert result.lines[0].notes == ("Capo 3",)
        assert chord_pairs(result.lines[0]) == [("G", 0), ("D", 5)]

    def test_unattached_notes_warning(self) -> None:
        """Test the warning for notes left at the end of the input."""
        result = parse_chart_text("Jesus loves me\nNote: repeat last line")
        assert result.warnings == (UNATTACHED_NOTES_WARNING,)
        assert result.lines[0].notes == ()

    def test_chord_only_inline_line_keeps_notes(self) -> None:
        """Test that an inline line with no lyric emits nothing and keeps notes."""
        result = parse_chart_text("Note: intro\n[G] [C] [D]\nJesus loves me")
        assert len(result.lines) == 1
        assert result.lines[0].text == "Jesus loves me"
        assert result.lines[0].notes == ("intro",)

    def test_crlf_line_endings(self) -> None:
        """Test that Windows line endings are handled."""
        result = parse_chart_text("G    D\r\nJesus loves me\r\n")
        assert len(result.lines) == 1
        assert result.lines[0].text == "Jesus loves me"

    def test_trailing_whitespace_trimmed(self) -> None:
        """Test that plain lines lose trailing whitespace but keep indentation."""
        result = parse_chart_text("  Jesus loves me   ")
        assert result.lines[0].text == "  Jesus loves me"

    def test_idempotent(self) -> None:
        """Test that parsing the same text twice gives equal results."""
        text = (TESTDATA_DIR / "amazing_grace_rows.txt").read_text(encoding="utf-8")
        assert parse_chart_text(text) == parse_chart_text(text)


class TestParseFixtures:
    """Test parsing fixture files."""

    @pytest.fixture
    def rows_chart(self) -> str:
        """Load amazing_grace_rows.txt fixture."""
        return (TESTDATA_DIR / "amazing_grace_rows.txt").read_text(encoding="utf-8")

    @pytest.fixture
    def inline_chart(self) -> str:
        """Load amazing_grace_inline.txt fixture."""
        return (TESTDATA_DIR / "amazing_grace_inline.txt").read_text(encoding="utf-8")

    def test_rows_fixture_lines(self, rows_chart: str) -> None:
        """Test the lyric lines found in the chord-row chart."""
        result = parse_chart_text(rows_chart)
        assert [line.text for line in result.lines] == [
            "Amazing Grace",
            "Amazing grace, how sweet the sound",
            "That saved a wretch like me",
            "I once was lost, but now am found",
            "Was blind, but now I see",
            "'Twas grace that taught my heart to fear",
        ]
        assert [line.source_line_index for line in result.lines] == [0, 5, 7, 10, 12, 17]
        assert result.warnings == ()

    def test_rows_fixture_chords(self, rows_chart: str) -> None:
        """Test the chord columns read from the chord rows."""
        result = parse_chart_text(rows_chart)
        assert chord_pairs(result.lines[1]) == [("G", 0), ("C", 15), ("G", 26)]
        assert chord_pairs(result.lines[3]) == [("G", 0), ("G7", 11), ("C", 20), ("G", 28)]

    def test_rows_fixture_notes(self, rows_chart: str) -> None:
        """Test that notes land on the lyric after them."""
        result = parse_chart_text(rows_chart)
        assert result.lines[1].notes == ("Capo 2, gentle start",)
        assert result.lines[5].notes == ("build here",)

    def test_inline_fixture(self, inline_chart: str) -> None:
        """Test the inline-chord chart."""
        result = parse_chart_text(inline_chart)
        assert [line.text for line in result.lines] == [
            "{title: Amazing Grace}",
            "Amazing grace, how sweet the sound",
            "That saved a wretch like me",
            "I once was lost, but now am found",
            "Was blind, but now I see",
        ]
        assert result.lines[1].notes == ("Capo 2",)
        assert chord_pairs(result.lines[1]) == [("G", 0), ("C", 19), ("G", 29)]
        assert chord_pairs(result.lines[4]) == [("G", 4), ("D", 15), ("G", 21)]
        assert result.warnings == (UNATTACHED_NOTES_WARNING,)
