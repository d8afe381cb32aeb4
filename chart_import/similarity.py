"""Line normalization and similarity scoring.

Chart lines and slide lines rarely agree on punctuation, capitalization or
spacing, so both sides are normalized before they are compared.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

PUNCTUATION_RE = re.compile(r"[^\w\s]")
WHITESPACE_RE = re.compile(r"\s+")

# Weight applied to substring matches so they never tie an exact match
SUBSTRING_WEIGHT = 0.9


def normalize_line(line: str) -> str:
    """Normalize a line for comparison.

    Lowercases, removes punctuation and collapses whitespace.

    Examples
    --------
    >>> normalize_line("  Amazing Grace,  how SWEET!")
    'amazing grace how sweet'
    >>> normalize_line("...")
    ''
    """
    line = PUNCTUATION_RE.sub("", line.lower())
    return WHITESPACE_RE.sub(" ", line).strip()


def line_match_score(a: str, b: str) -> float:
    """Score how well two normalized lines match.

    Parameters
    ----------
    a : str
        First normalized line.
    b : str
        Second normalized line.

    Returns
    -------
    float
        Score between 0.0 (nothing in common) and 1.0 (identical).

    Notes
    -----
    - 1.0 if the lines are identical
    - ``0.9 * shorter / longer`` (in characters) if one contains the other
    - otherwise the number of words of ``a`` that appear in ``b``, divided by
      the word count of the longer line. Unlike Jaccard similarity this
      favours one line being nearly a subset of the other.

    Examples
    --------
    >>> line_match_score("amazing grace", "amazing grace")
    1.0
    >>> line_match_score("amazing", "amazing graces")
    0.45
    >>> line_match_score("i once was lost", "i once was found")
    0.75
    """
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    if a in b or b in a:
        shorter, longer = sorted((len(a), len(b)))
        return SUBSTRING_WEIGHT * (shorter / longer)

    words_a = a.split()
    words_b = b.split()
    if not words_a or not words_b:
        return 0.0

    vocabulary_b = set(words_b)
    common = sum(1 for word in words_a if word in vocabulary_b)
    return common / max(len(words_a), len(words_b))


def score_candidates(source: str, targets: Sequence[str]) -> NDArray[np.float64]:
    """Score one normalized line against several normalized candidates.

    Parameters
    ----------
    source : str
        The normalized line being placed.
    targets : Sequence[str]
        Normalized candidate lines.

    Returns
    -------
    NDArray[np.float64]
        One score per candidate, in candidate order.
    """
    scores = np.zeros(len(targets), dtype=np.float64)
    for j, target in enumerate(targets):
        scores[j] = line_match_score(source, target)
    return scores


def build_score_matrix(sources: Sequence[str], targets: Sequence[str]) -> NDArray[np.float64]:
    """Build the full score matrix between two sets of lines.

    Lines are normalized here, so raw chart and slide text can be passed in.

    Parameters
    ----------
    sources : Sequence[str]
        Lines from the chart.
    targets : Sequence[str]
        Lines from the slides.

    Returns
    -------
    NDArray[np.float64]
        Matrix of shape (len(sources), len(targets)).
    """
    matrix = np.zeros((len(sources), len(targets)), dtype=np.float64)
    normalized_targets = [normalize_line(t) for t in targets]

    for i, source in enumerate(sources):
        matrix[i, :] = score_candidates(normalize_line(source), normalized_targets)

    return matrix
