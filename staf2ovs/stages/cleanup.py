from __future__ import annotations

import typing as t

from staf2ovs.models import BayLevel, RowInfo, UsesMaster
from staf2ovs.utils import get_logger

logger = get_logger(__name__)

# Working fields that must never reach the output document
TRANSIENT_KEYS = frozenset({"perTierInfo", "label20", "label40"})

# Top-level fields kept even when empty
DOCUMENT_KEYS = ("schema", "version", "sizeSummary", "shipData", "baysData", "positionLabels", "lidData")

# Produced by the label/lid stages, emitted as they are
PASSTHROUGH_KEYS = frozenset({"positionLabels", "lidData"})


def _value(v):
    if isinstance(v, UsesMaster):
        return None
    if hasattr(v, "value"):  # enums
        return v.value
    return v


def _row_to_dict(row: RowInfo) -> dict:
    return {
        "tcg": _value(row.tcg),
        "bottomIsoTier": row.bottom_iso_tier,
        "topIsoTier": row.top_iso_tier,
        "bottomBase": _value(row.bottom_base),
        "maxHeight": row.max_height,
        "rowInfoByLength": {
            str(int(size)): {"lcg": info.lcg} for size, info in row.row_info_by_length.items()
        },
    }


def bay_level_to_dict(bl: BayLevel) -> dict:
    out = {
        "isoBay": f"{bl.iso_bay:03d}",
        "level": bl.level.value,
        "infoByContLength": {
            str(int(size)): {"lcg": info.lcg, "stackWeight": info.stack_weight}
            for size, info in bl.info_by_cont_length.items()
        },
        "perRowInfo": {"each": {code: _row_to_dict(row) for code, row in bl.per_row_info.items()}},
        "perSlotInfo": {
            key: {
                "sizes": {str(int(size)): 1 for size in slot.sizes},
                "reefer": slot.reefer,
                "restricted": slot.restricted,
            }
            for key, slot in bl.per_slot_info.items()
        },
        "perStackInfo": {"common": {"maxHeight": bl.max_height}},
        "pairedBay": _value(bl.paired_bay),
        "doors": _value(bl.doors),
        "athwartShip": bl.athwart_ship,
    }
    if bl.bulkhead:
        out["bulkhead"] = {
            "fore": bl.bulkhead.fore,
            "foreLcg": bl.bulkhead.fore_lcg,
            "aftLcg": bl.bulkhead.aft_lcg,
        }
    return out


def prune(obj, drop: t.FrozenSet[str] = frozenset()):
    """Drop None values, empty objects and ``drop`` keys, recursively.

    Integral floats become ints so output stays stable across runs.
    """
    if isinstance(obj, dict):
        out = {}
        for k, v in obj.items():
            if k in drop:
                continue
            v = prune(v, drop)
            if v is None or (isinstance(v, dict) and not v):
                continue
            out[k] = v
        return out
    if isinstance(obj, list):
        return [prune(v, drop) for v in obj if v is not None]
    if isinstance(obj, float) and obj.is_integer():
        return int(obj)
    return obj


def clean_bay_levels(bls: t.List[BayLevel]) -> t.List[dict]:
    return [prune(bay_level_to_dict(bl), drop=TRANSIENT_KEYS) for bl in bls]


def clean_up_document(doc: dict) -> dict:
    """Prune every top-level section in place, keeping the fixed top-level keys."""
    for key in list(doc.keys()):
        if key in PASSTHROUGH_KEYS:
            continue
        value = prune(doc[key], TRANSIENT_KEYS if key == "baysData" else frozenset())
        if value is None and key not in DOCUMENT_KEYS:
            del doc[key]
            continue
        doc[key] = value
    logger.debug("cleanup: bays=%d", len(doc.get("baysData") or []))
    return doc
