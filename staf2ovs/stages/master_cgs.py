"""Vessel-wide dominant CG values ("master CGs") and per-row compaction.

Grouping keys per family:

- ``aboveTcgs``: TCG of rows in ABOVE bay-levels, keyed by ISO row.
- ``belowTcgs``: TCG of rows in BELOW bay-levels, keyed by ISO row.
- ``bottomBases``: bottom base of rows in any level, keyed by bottom ISO tier.

A compacted row holds ``UsesMaster(key, value)`` instead of the number. The
placeholder keeps its value, so counting over compacted rows sees the same
numbers and running the consolidation again gives the same tables.
"""

from __future__ import annotations

import typing as t
from dataclasses import dataclass, field

from staf2ovs.models import BayLevel, BayLevelEnum, RowInfo, UsesMaster
from staf2ovs.utils import get_logger

logger = get_logger(__name__)


@dataclass
class MasterCGs:
    above_tcgs: t.Dict[str, float] = field(default_factory=dict)
    below_tcgs: t.Dict[str, float] = field(default_factory=dict)
    bottom_bases: t.Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> t.Dict[str, t.Dict[str, float]]:
        return {
            "aboveTcgs": dict(self.above_tcgs),
            "belowTcgs": dict(self.below_tcgs),
            "bottomBases": dict(self.bottom_bases),
        }


@dataclass(frozen=True)
class _Family:
    table: str
    attr: str
    level: t.Optional[BayLevelEnum]
    key: t.Callable[[RowInfo], t.Optional[str]]


FAMILIES: t.Tuple[_Family, ...] = (
    _Family("above_tcgs", "tcg", BayLevelEnum.ABOVE, lambda row: row.iso_row),
    _Family("below_tcgs", "tcg", BayLevelEnum.BELOW, lambda row: row.iso_row),
    _Family("bottom_bases", "bottom_base", None, lambda row: row.bottom_iso_tier),
)


def _family_rows(bls: t.List[BayLevel], fam: _Family) -> t.Iterator[t.Tuple[RowInfo, str]]:
    for bl in bls:
        if fam.level is not None and bl.level != fam.level:
            continue
        for row in bl.per_row_info.values():
            key = fam.key(row)
            if key is not None:
                yield row, key


def _effective(value) -> t.Optional[float]:
    if isinstance(value, UsesMaster):
        return value.value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def dominant_value(values: t.Iterable[float]) -> t.Optional[float]:
    """Most frequent value; ties go to the value seen first."""
    counts: t.Dict[float, int] = {}
    for v in values:
        counts[v] = counts.get(v, 0) + 1
    best, best_n = None, 0
    for v, n in counts.items():
        if n > best_n:
            best, best_n = v, n
    return best


def calculate_master_cgs(bls: t.List[BayLevel]) -> MasterCGs:
    master = MasterCGs()
    for fam in FAMILIES:
        grouped: t.Dict[str, t.List[float]] = {}
        for row, key in _family_rows(bls, fam):
            v = _effective(getattr(row, fam.attr))
            if v is not None:
                grouped.setdefault(key, []).append(v)
        table = getattr(master, fam.table)
        for key, values in grouped.items():
            table[key] = dominant_value(values)
    return master


def clean_repeated_cgs(
    master: MasterCGs,
    bls: t.List[BayLevel],
) -> t.Tuple[int, int]:
    """Replace values equal to their master with ``UsesMaster``.

    A placeholder whose master changed is expanded back to its number.
    Returns ``(compacted, overrides)``.
    """
    compacted = overrides = 0
    for fam in FAMILIES:
        table = getattr(master, fam.table)
        for row, key in _family_rows(bls, fam):
            v = _effective(getattr(row, fam.attr))
            if v is None:
                continue
            if key in table and v == table[key]:
                setattr(row, fam.attr, UsesMaster(key, v))
                compacted += 1
            else:
                setattr(row, fam.attr, v)
                overrides += 1
    return compacted, overrides


def consolidate_master_cgs(bls: t.List[BayLevel]) -> MasterCGs:
    master = calculate_master_cgs(bls)
    compacted, overrides = clean_repeated_cgs(master, bls)
    logger.info(
        "master_cgs: above=%d below=%d bottom_bases=%d compacted=%d overrides=%d",
        len(master.above_tcgs),
        len(master.below_tcgs),
        len(master.bottom_bases),
        compacted,
        overrides,
    )
    return master
