from __future__ import annotations

from typing import Dict, List

from staf2ovs.models import BayLevel
from staf2ovs.utils import get_logger

logger = get_logger(__name__)


def extract_labels(bls: List[BayLevel]) -> Dict[str, Dict[str, Dict[str, str]]]:
    """Move bay labels out of the bay-levels into ``positionLabels``."""
    bay_names: Dict[str, Dict[str, str]] = {}
    for bl in bls:
        names = bay_names.setdefault(f"{bl.iso_bay:03d}", {})
        if bl.label20 and "label20" not in names:
            names["label20"] = bl.label20
        if bl.label40 and "label40" not in names:
            names["label40"] = bl.label40
        bl.label20 = None
        bl.label40 = None
    bay_names = {bay: names for bay, names in bay_names.items() if names}
    logger.info("labels: bays=%d", len(bay_names))
    return {"bayNames": bay_names}


def transform_lids(lid_records: List[dict]) -> List[dict]:
    keys = ("label", "startIsoBay", "endIsoBay", "portIsoRow", "starboardIsoRow", "weight")
    lids = [{k: rec[k] for k in keys if rec.get(k) is not None} for rec in lid_records]
    logger.info("labels.lids: lids=%d", len(lids))
    return lids


def get_container_lengths(bls: List[BayLevel]) -> List[int]:
    sizes = set()
    for bl in bls:
        sizes.update(int(s) for s in bl.info_by_cont_length)
        for row in bl.per_row_info.values():
            sizes.update(int(s) for s in row.row_info_by_length)
        for slot in bl.per_slot_info.values():
            sizes.update(int(s) for s in slot.sizes)
    return sorted(sizes)
