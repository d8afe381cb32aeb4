"""Chord-token recognition for uploaded chord charts.

This module decides whether a whitespace-delimited token looks like a chord
symbol and reads chord rows (lines made mostly of chords) into chord/column
pairs. Recognition is purely by shape: nothing here knows which chords are
musically valid.
"""

from __future__ import annotations

import re

from chart_import.models import ParsedChord
from chart_import.tokenizer import tokenize_line

# Share of tokens that must be chord-shaped for a line to be a chord row
CHORD_LINE_THRESHOLD = 0.6
CHORD_LINE_MIN_TOKENS = 2

NO_CHORD_MARKERS: frozenset[str] = frozenset({"N.C.", "NC"})

LEADING_JUNK_RE = re.compile(r"^[^A-Za-z]+")
TRAILING_JUNK_RE = re.compile(r"[^A-Za-z0-9#+()\-./]+$")

# Root (A-G), optional accidental, free-form extension, optional slash bass
CHORD_TOKEN_RE = re.compile(
    r"^[A-G](?:#|b)?"
    r"[0-9a-zA-Z+()\-./]*"
    r"(?:/[A-G](?:#|b)?[0-9a-zA-Z+()\-./]*)?$",
    re.IGNORECASE,
)


def normalize_chord_token(token: str) -> str:
    """Strip decoration around a chord token.

    Removes leading characters before the first letter and trailing
    characters that cannot be part of a chord symbol. Letters are never
    stripped from the end, so quality suffixes such as ``m`` and ``sus``
    survive.

    Examples
    --------
    >>> normalize_chord_token("(G)")
    'G)'
    >>> normalize_chord_token("|Am7|")
    'Am7'
    >>> normalize_chord_token("D/F#,")
    'D/F#'
    """
    token = LEADING_JUNK_RE.sub("", token)
    return TRAILING_JUNK_RE.sub("", token)


def is_chord_token(token: str) -> bool:
    """Check whether a token is chord-symbol-shaped.

    Parameters
    ----------
    token : str
        A single whitespace-delimited token.

    Returns
    -------
    bool
        True if the cleaned token is a chord symbol or a no-chord marker.

    Examples
    --------
    >>> is_chord_token("D/F#")
    True
    >>> is_chord_token("N.C.")
    True
    >>> is_chord_token("Jesus")
    False
    """
    normalized = normalize_chord_token(token)
    if not normalized:
        return False
    if normalized.upper() in NO_CHORD_MARKERS:
        return True
    return CHORD_TOKEN_RE.match(normalized) is not None


def is_chord_line(line: str) -> bool:
    """Check whether a line is a chord row.

    A chord row has at least two tokens and at least 60% of them are
    chord-shaped.

    Examples
    --------
    >>> is_chord_line("C  G  Am  F")
    True
    >>> is_chord_line("G")
    False
    >>> is_chord_line("Jesus loves me")
    False
    """
    tokens = line.split()
    if len(tokens) < CHORD_LINE_MIN_TOKENS:
        return False
    chord_count = sum(1 for token in tokens if is_chord_token(token))
    return chord_count / len(tokens) >= CHORD_LINE_THRESHOLD


def parse_chord_positions(line: str) -> list[ParsedChord]:
    """Read the chords of a chord row with their columns.

    Non-chord tokens on the row are skipped. Each chord keeps the column of
    the raw token it came from, so it lines up with the lyric line below.

    Parameters
    ----------
    line : str
        The chord row, unstripped.

    Returns
    -------
    list[ParsedChord]
        Normalized chord text and column for each chord token.

    Examples
    --------
    >>> [(c.chord, c.char_index) for c in parse_chord_positions("G      C/E  D")]
    [('G', 0), ('C/E', 7), ('D', 12)]
    """
    chords: list[ParsedChord] = []
    for token in tokenize_line(line):
        normalized = normalize_chord_token(token.text)
        if not normalized or not is_chord_token(normalized):
            continue
        chords.append(ParsedChord(chord=normalized, char_index=token.start))
    return chords
