from __future__ import annotations

import typing as t

from staf2ovs.helpers import tier_number
from staf2ovs.models import (
    BayLevel,
    BayLevelEnum,
    Bulkhead,
    ContainerLength,
    LengthInfo,
    RowInfo,
    RowLengthInfo,
    SlotInfo,
    TierInfo,
)
from staf2ovs.stages.index import bay_level_key, index_records
from staf2ovs.utils import get_logger

logger = get_logger(__name__)

# ISO 9711: above-deck tiers are numbered from 80 upwards
DEFAULT_MIN_ABOVE_TIER = 80


def _length_items(by_length: t.Optional[dict]) -> t.Iterator[t.Tuple[ContainerLength, dict]]:
    for raw_len, vals in (by_length or {}).items():
        try:
            size = ContainerLength(int(raw_len))
        except ValueError:
            continue
        yield size, vals or {}


def _new_bay_level(rec: dict) -> BayLevel:
    bl = BayLevel(iso_bay=int(rec["isoBay"]), level=rec["level"])
    bl.label20 = rec.get("label20")
    bl.label40 = rec.get("label40")
    for size, vals in _length_items(rec.get("infoByContLength")):
        info = LengthInfo(lcg=vals.get("lcg"), stack_weight=vals.get("stackWeight"))
        if info.lcg is not None or info.stack_weight is not None:
            bl.info_by_cont_length[size] = info
    bh = rec.get("bulkhead")
    if bh:
        bl.bulkhead = Bulkhead(fore=bh.get("fore"), fore_lcg=bh.get("foreLcg"), aft_lcg=bh.get("aftLcg"))
    bl.max_height = rec.get("maxHeight")
    bl.paired_bay = rec.get("pairedBay")
    bl.doors = rec.get("doors")
    bl.athwart_ship = rec.get("athwartShip")
    return bl


def build_bay_levels(section_records: t.List[dict], *other_records: t.List[dict]) -> t.List[BayLevel]:
    """Create one container per (isoBay, level), in discovery order.

    Section records are discovered first; pairs only seen in row or tier
    records get an empty container appended after them.
    """
    bls: t.List[BayLevel] = []
    seen: t.Set[str] = set()
    duplicates = 0
    for rec in section_records:
        key = bay_level_key(rec["isoBay"], rec["level"])
        if key in seen:
            duplicates += 1
            continue
        seen.add(key)
        bls.append(_new_bay_level(rec))

    discovered = 0
    for records in other_records:
        for rec in records:
            key = bay_level_key(rec["isoBay"], rec["level"])
            if key in seen:
                continue
            seen.add(key)
            bls.append(BayLevel(iso_bay=int(rec["isoBay"]), level=rec["level"]))
            discovered += 1

    if duplicates:
        logger.warning("hierarchy: ignored duplicated bay-levels=%d", duplicates)
    logger.info("hierarchy: bay_levels=%d (discovered from rows/tiers=%d)", len(bls), discovered)
    return bls


def _lower_tier(a: t.Optional[str], b: t.Optional[str]) -> t.Optional[str]:
    if a is None or b is None:
        return a if b is None else b
    return a if tier_number(a) <= tier_number(b) else b


def _upper_tier(a: t.Optional[str], b: t.Optional[str]) -> t.Optional[str]:
    if a is None or b is None:
        return a if b is None else b
    return a if tier_number(a) >= tier_number(b) else b


def add_per_row_info(bls: t.List[BayLevel], rows_by_key: t.Dict[str, t.List[dict]]) -> t.List[int]:
    """Merge row records into ``per_row_info``. Returns the ISO bays seen."""
    iso_bays: t.List[int] = []
    n_rows = 0
    for bl in bls:
        if bl.iso_bay not in iso_bays:
            iso_bays.append(bl.iso_bay)
        for rec in rows_by_key.get(bl.key, []):
            code = rec["isoRow"]
            row = bl.per_row_info.get(code)
            if row is None:
                row = RowInfo(iso_row=code)
                bl.per_row_info[code] = row
                n_rows += 1
            if rec.get("tcg") is not None:
                row.tcg = rec["tcg"]
            if rec.get("bottomBase") is not None:
                row.bottom_base = rec["bottomBase"]
            if rec.get("maxHeight") is not None:
                row.max_height = rec["maxHeight"]
            row.bottom_iso_tier = _lower_tier(row.bottom_iso_tier, rec.get("bottomIsoTier"))
            row.top_iso_tier = _upper_tier(row.top_iso_tier, rec.get("topIsoTier"))
            for size, vals in _length_items(rec.get("rowInfoByLength")):
                if vals.get("lcg") is not None:
                    row.row_info_by_length[size] = RowLengthInfo(lcg=vals["lcg"])
    logger.info("hierarchy.rows: rows=%d bays=%d", n_rows, len(iso_bays))
    return iso_bays


def add_per_tier_info(bls: t.List[BayLevel], tiers_by_key: t.Dict[str, t.List[dict]]) -> None:
    n_tiers = 0
    for bl in bls:
        if bl.per_tier_info is None:
            raise RuntimeError(f"per-tier info of bay-level {bl.key} was already consumed")
        for rec in tiers_by_key.get(bl.key, []):
            code = rec["isoTier"]
            tier = bl.per_tier_info.get(code)
            if tier is None:
                tier = TierInfo(iso_tier=code)
                bl.per_tier_info[code] = tier
                n_tiers += 1
            if rec.get("vcg") is not None:
                tier.vcg = rec["vcg"]
    logger.info("hierarchy.tiers: tiers=%d", n_tiers)


def level_for_tier(iso_tier: str, min_above_tier: int) -> BayLevelEnum:
    return BayLevelEnum.ABOVE if tier_number(iso_tier) >= min_above_tier else BayLevelEnum.BELOW


def add_per_slot_info(
    bls: t.List[BayLevel],
    slot_records: t.List[dict],
    min_above_tier: t.Optional[int],
) -> None:
    """Merge slot records into ``per_slot_info`` keyed ``{row}{tier}``.

    Slot records without a level are placed by comparing their tier with the
    vessel-wide ``min_above_tier``.
    """
    if min_above_tier is None:
        min_above_tier = DEFAULT_MIN_ABOVE_TIER

    def _key(rec: dict) -> str:
        level = rec.get("level") or level_for_tier(rec["isoTier"], min_above_tier)
        return bay_level_key(rec["isoBay"], level)

    slots_by_key = index_records(slot_records, key=_key)
    known = {bl.key for bl in bls}
    orphans = sum(len(v) for k, v in slots_by_key.items() if k not in known)

    n_slots = 0
    for bl in bls:
        for rec in slots_by_key.get(bl.key, []):
            bl.per_slot_info[f"{rec['isoRow']}{rec['isoTier']}"] = SlotInfo(
                sizes=list(rec.get("sizes") or []),
                reefer=rec.get("reefer"),
                restricted=rec.get("restricted"),
            )
            n_slots += 1

    if orphans:
        logger.warning("hierarchy.slots: skipped slots without bay-level=%d", orphans)
    logger.info("hierarchy.slots: slots=%d min_above_tier=%d", n_slots, min_above_tier)
