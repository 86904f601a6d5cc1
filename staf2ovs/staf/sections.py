from __future__ import annotations

import typing as t

from staf2ovs.utils import get_logger

logger = get_logger(__name__)

ABSENT_VALUES = ("", "-")

Sections = t.Dict[str, t.List[t.Dict[str, t.Optional[str]]]]


def _split(line: str) -> t.List[str]:
    return [c.strip() for c in line.split("\t")]


def get_sections(content: str) -> Sections:
    """Split STAF text into ``{section name: [row dict, ...]}``.

    A ``*NAME`` line opens a section, its first ``**`` line is the tab
    separated header, later ``**`` lines are comments. Absent cells map to None.
    """
    sections: Sections = {}
    current: t.Optional[str] = None
    header: t.Optional[t.List[str]] = None

    for lineno, raw in enumerate((content or "").splitlines(), start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        if line.startswith("**"):
            if current is not None and header is None:
                header = [h.upper() for h in _split(line[2:])]
            continue
        if line.startswith("*"):
            current = line[1:].strip().upper()
            header = None
            sections.setdefault(current, [])
            continue
        if current is None:
            continue
        if header is None:
            logger.warning("staf.sections: data before header in %s at line %d", current, lineno)
            continue

        cells = _split(line)
        if len(cells) > len(header):
            logger.debug("staf.sections: %s line %d has %d extra cells", current, lineno, len(cells) - len(header))
        row = {}
        for i, name in enumerate(header):
            value = cells[i] if i < len(cells) else ""
            row[name] = None if value in ABSENT_VALUES else value
        sections[current].append(row)

    logger.info(
        "staf.sections: %s",
        " ".join(f"{name}={len(rows)}" for name, rows in sections.items()) or "none",
    )
    return sections
