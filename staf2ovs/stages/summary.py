from __future__ import annotations

from typing import Dict, Iterable, List, Set

from staf2ovs.models import BayLevel, BayLevelEnum
from staf2ovs.utils import get_logger

logger = get_logger(__name__)


def _collect_tiers(bl: BayLevel) -> Set[int]:
    tiers: Set[int] = set()
    for row in bl.per_row_info.values():
        for code in (row.bottom_iso_tier, row.top_iso_tier):
            if code is not None:
                tiers.add(int(code))
    # per_tier_info is gone after the CG remap
    for code in (bl.per_tier_info or {}):
        tiers.add(int(code))
    for slot_key in bl.per_slot_info:
        tiers.add(int(slot_key[2:]))
    return tiers


def create_summary(iso_bays: Iterable[int], bls: List[BayLevel]) -> Dict[str, object]:
    """Vessel-wide extents over whatever state the bay-levels hold right now."""
    rows: Set[int] = set()
    above: Set[int] = set()
    below: Set[int] = set()

    for bl in bls:
        rows.update(int(code) for code in bl.per_row_info)
        rows.update(int(slot_key[:2]) for slot_key in bl.per_slot_info)
        tiers = _collect_tiers(bl)
        if bl.level == BayLevelEnum.ABOVE:
            above.update(tiers)
        else:
            below.update(tiers)

    summary: Dict[str, object] = {
        "isoBays": len(set(iso_bays)),
        "centerLineRow": 0 in rows,
    }
    if rows:
        summary["maxRow"] = f"{max(rows):02d}"
    if above:
        summary["minAboveTier"] = f"{min(above):02d}"
        summary["maxAboveTier"] = f"{max(above):02d}"
    if below:
        summary["minBelowTier"] = f"{min(below):02d}"
        summary["maxBelowTier"] = f"{max(below):02d}"

    logger.debug("summary: %s", summary)
    return summary
