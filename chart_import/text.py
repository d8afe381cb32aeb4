"""Plain-text decoding for uploaded chart files."""

from __future__ import annotations

from dataclasses import dataclass

LATIN1_WARNING = "File was decoded as Latin-1 (may have encoding issues)"

BOM = "\ufeff"
REPLACEMENT_CHAR = "\ufffd"


@dataclass(frozen=True)
class DecodedText:
    """Decoded file text.

    Parameters
    ----------
    text : str
        The text with line endings normalized to ``\\n``.
    warning : str | None
        Set when the decoding may have garbled characters.
    """

    text: str
    warning: str | None = None


def normalize_line_endings(text: str) -> str:
    r"""Convert ``\r\n`` and ``\r`` line endings to ``\n``.

    Examples
    --------
    >>> normalize_line_endings("a\r\nb\rc")
    'a\nb\nc'
    """
    return text.replace("\r\n", "\n").replace("\r", "\n")


def decode_text(data: bytes) -> DecodedText:
    """Decode the bytes of a plain-text chart.

    UTF-8 is tried first, with a leading byte-order mark dropped. Bytes that
    are not valid UTF-8 fall back to Latin-1, which always decodes, and the
    result carries a warning.

    Examples
    --------
    >>> decode_text("Amazing grace\\r\\n".encode("utf-8")).text
    'Amazing grace\\n'
    >>> decoded = decode_text("Caf\\xe9".encode("latin-1"))
    >>> decoded.text, decoded.warning is not None
    ('Café', True)
    """
    text = data.decode("utf-8", errors="replace")
    if text.startswith(BOM):
        text = text[len(BOM) :]

    if REPLACEMENT_CHAR in text:
        return DecodedText(text=normalize_line_endings(data.decode("latin-1")), warning=LATIN1_WARNING)

    return DecodedText(text=normalize_line_endings(text))
