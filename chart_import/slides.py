"""Slide-line assembly.

This module flattens a song's stored slide groups and slides into the ordered
sequence of slide lines the aligner matches against, and loads that sequence
from JSON.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from chart_import.models import Slide, SlideGroup, SlideLine


def order_group_ids(
    groups: Iterable[SlideGroup],
    arrangement_group_ids: Sequence[str] | None = None,
) -> list[str]:
    """Order slide groups for performance.

    Groups named by the arrangement come first, in arrangement order; ids
    the song does not have are ignored. Remaining groups follow in their
    default position order.

    Examples
    --------
    >>> groups = [SlideGroup("v1", 0), SlideGroup("ch", 1), SlideGroup("v2", 2)]
    >>> order_group_ids(groups, ["ch", "missing", "v1"])
    ['ch', 'v1', 'v2']
    """
    default_order = [g.id for g in sorted(groups, key=lambda g: g.position)]
    if not arrangement_group_ids:
        return default_order

    known = set(default_order)
    arranged = [group_id for group_id in arrangement_group_ids if group_id in known]
    arranged_set = set(arranged)
    return arranged + [group_id for group_id in default_order if group_id not in arranged_set]


def build_slide_lines(
    groups: Iterable[SlideGroup],
    slides: Iterable[Slide],
    arrangement_group_ids: Sequence[str] | None = None,
) -> list[SlideLine]:
    """Flatten slides into slide lines in performance order.

    Parameters
    ----------
    groups : Iterable[SlideGroup]
        The song's slide groups.
    slides : Iterable[Slide]
        The song's slides.
    arrangement_group_ids : Sequence[str] | None
        Group order of the chosen arrangement, if any.

    Returns
    -------
    list[SlideLine]
        One entry per physical line. A slide whose lines are None
        contributes a single empty line so it still occupies a position; an
        empty tuple contributes nothing.
    """
    slides_by_group: dict[str, list[Slide]] = {}
    for slide in slides:
        slides_by_group.setdefault(slide.group_id, []).append(slide)

    slide_lines: list[SlideLine] = []
    for group_id in order_group_ids(groups, arrangement_group_ids):
        for slide in sorted(slides_by_group.get(group_id, []), key=lambda s: s.position):
            lines = ("",) if slide.lines is None else slide.lines
            for line_index, text in enumerate(lines):
                slide_lines.append(SlideLine(slide_id=slide.id, line_index=line_index, text=text))

    return slide_lines


def _records(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    records = data.get(key) or []
    if not isinstance(records, list):
        msg = f"{key!r} must be a list, got {type(records).__name__}"
        raise ValueError(msg)
    for item in records:
        if not isinstance(item, dict):
            msg = f"Entries of {key!r} must be objects, got {item!r}"
            raise ValueError(msg)
    return records


def _require(item: dict[str, Any], key: str) -> Any:
    if key not in item:
        msg = f"Missing {key!r} in slide data: {item!r}"
        raise ValueError(msg)
    return item[key]


def _as_int(value: Any, key: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        msg = f"{key!r} must be an integer, got {value!r}"
        raise ValueError(msg) from None


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _slide_lines_field(item: dict[str, Any]) -> tuple[str, ...] | None:
    lines = item.get("lines")
    if lines is None:
        return None
    if not isinstance(lines, list):
        msg = f"'lines' must be a list, got {lines!r}"
        raise ValueError(msg)
    return tuple(_as_text(line) for line in lines)


def parse_slide_lines_data(data: dict[str, Any]) -> list[SlideLine]:
    """Parse slide lines from a dictionary.

    Two layouts are accepted. A flat list::

        {"slideLines": [{"slideId": "s1", "lineIndex": 0, "text": "..."}]}

    or the stored song structure, flattened with :func:`build_slide_lines`::

        {
            "groups": [{"id": "g1", "position": 0}],
            "slides": [{"id": "s1", "groupId": "g1", "position": 0,
                        "lines": ["...", "..."]}],
            "arrangement": ["g1"]
        }

    A slide whose ``lines`` is missing or null stands for one empty line.

    Parameters
    ----------
    data : dict[str, Any]
        Decoded JSON.

    Returns
    -------
    list[SlideLine]
        Slide lines in performance order.

    Raises
    ------
    ValueError
        If neither layout is present, a record is not an object, or a record
        is missing a field or has one of the wrong type.
    """
    if not isinstance(data, dict):
        msg = f"Slide data must be a JSON object, got {type(data).__name__}"
        raise ValueError(msg)

    if "slideLines" in data:
        return [
            SlideLine(
                slide_id=str(_require(item, "slideId")),
                line_index=_as_int(_require(item, "lineIndex"), "lineIndex"),
                text=_as_text(item.get("text")),
            )
            for item in _records(data, "slideLines")
        ]

    if "slides" in data:
        groups = [
            SlideGroup(id=str(_require(item, "id")), position=_as_int(item.get("position", index), "position"))
            for index, item in enumerate(_records(data, "groups"))
        ]
        slides = [
            Slide(
                id=str(_require(item, "id")),
                group_id=str(_require(item, "groupId")),
                lines=_slide_lines_field(item),
                position=_as_int(item.get("position", index), "position"),
            )
            for index, item in enumerate(_records(data, "slides"))
        ]
        return build_slide_lines(groups, slides, data.get("arrangement"))

    msg = "Slide data must contain 'slideLines' or 'slides'"
    raise ValueError(msg)


def load_slide_lines_json(path: str | Path) -> list[SlideLine]:
    """Load slide lines from a JSON file.

    Parameters
    ----------
    path : str | Path
        Path to the JSON file. See :func:`parse_slide_lines_data`.

    Returns
    -------
    list[SlideLine]
        Slide lines in performance order.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = json.load(f)

    return parse_slide_lines_data(data)
