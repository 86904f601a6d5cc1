from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from staf2ovs.utils import get_logger

logger = get_logger(__name__)


def bay_level_key(iso_bay, level) -> str:
    lv = level.value if isinstance(level, Enum) else level
    return f"{int(iso_bay)}-{lv}"


def index_records(
    records: Iterable[dict],
    key: Optional[Callable[[dict], str]] = None,
) -> Dict[str, List[dict]]:
    """Group flat records by ``"{isoBay}-{level}"`` keeping input order."""
    out: Dict[str, List[dict]] = {}
    n = 0
    for rec in records:
        k = key(rec) if key else bay_level_key(rec["isoBay"], rec["level"])
        out.setdefault(k, []).append(rec)
        n += 1
    logger.debug("index: records=%d keys=%d", n, len(out))
    return out
