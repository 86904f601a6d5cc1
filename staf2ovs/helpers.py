"""Value mappers used by the STAF section tables.

Every mapper takes the raw cell string and returns ``None`` when the cell
cannot be interpreted, so the applier simply leaves the field out.
"""

import math
import re
from typing import List, Optional

from staf2ovs.models import (
    BayLevelEnum,
    ContainerLength,
    ForeAft,
    KnownEstimated,
    LcgReference,
    PortStarboard,
    ValuesSource,
)

# Numeric codes of at most 2 (rows, tiers) or 3 (bays) digits
_CODE_RES = {2: re.compile(r"^\d{1,2}$"), 3: re.compile(r"^\d{1,3}$")}

# ---------- Numbers & units ----------

def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def safe_number(raw) -> Optional[float]:
    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    s = str(raw).strip().replace(",", ".")
    if not s:
        return None
    try:
        n = float(s)
    except ValueError:
        return None
    if math.isnan(n) or math.isinf(n):
        return None
    return n


def safe_number_mt_to_mm(raw) -> Optional[int]:
    n = safe_number(raw)
    return None if n is None else round_half_up(n * 1000)


def safe_number_tons_to_grams(raw) -> Optional[int]:
    n = safe_number(raw)
    return None if n is None else round_half_up(n * 1_000_000)


def safe_int(raw) -> Optional[int]:
    n = safe_number(raw)
    return None if n is None else int(n)

# ---------- Labels & codes ----------

def _pad(raw, width: int) -> Optional[str]:
    if raw is None:
        return None
    s = str(raw).strip()
    if not _CODE_RES[width].match(s):
        return None
    return s.zfill(width)


def pad2(raw) -> Optional[str]:
    return _pad(raw, 2)


def pad3(raw) -> Optional[str]:
    return _pad(raw, 3)


def iso_bay(raw) -> Optional[int]:
    s = pad3(raw)
    return None if s is None else int(s)


def tier_number(code: Optional[str]) -> Optional[int]:
    return None if code is None else int(code)


def yn_to_bool(raw) -> Optional[bool]:
    s = str(raw or "").strip().upper()
    if s in ("Y", "YES"):
        return True
    if s in ("N", "NO"):
        return False
    return None


def staf_level(raw) -> Optional[BayLevelEnum]:
    s = str(raw or "").strip().upper()
    if s in ("DK", "ABOVE", "A"):
        return BayLevelEnum.ABOVE
    if s in ("HD", "BELOW", "B"):
        return BayLevelEnum.BELOW
    return None


def staf_fore_aft(raw) -> Optional[ForeAft]:
    s = str(raw or "").strip().upper()
    if s in ("F", "FWD"):
        return ForeAft.FWD
    if s in ("A", "AFT"):
        return ForeAft.AFT
    return None


def staf_port_starboard(raw) -> Optional[PortStarboard]:
    s = str(raw or "").strip().upper()
    if s in ("P", "PORT"):
        return PortStarboard.PORT
    if s in ("S", "STBD", "STARBOARD"):
        return PortStarboard.STARBOARD
    return None


def staf_lcg_reference(raw) -> Optional[LcgReference]:
    s = str(raw or "").strip().upper()
    return {
        "AP": LcgReference.AFT_PERPENDICULAR,
        "FP": LcgReference.FWD_PERPENDICULAR,
        "MS": LcgReference.MIDSHIPS,
    }.get(s)


def staf_values_known(raw) -> Optional[KnownEstimated]:
    b = yn_to_bool(raw)
    if b is None:
        return None
    return KnownEstimated.KNOWN if b else KnownEstimated.ESTIMATED


def staf_values_by_tier(raw) -> Optional[ValuesSource]:
    b = yn_to_bool(raw)
    if b is None:
        return None
    return ValuesSource.BY_TIER if b else ValuesSource.ESTIMATED


def staf_sizes(raw) -> Optional[List[ContainerLength]]:
    """Parse a sizes cell such as ``20/40`` or ``20 40 45``."""
    out: List[ContainerLength] = []
    for tok in re.split(r"[\s/,;]+", str(raw or "").strip()):
        n = safe_int(tok)
        if n is None:
            continue
        try:
            size = ContainerLength(n)
        except ValueError:
            continue
        if size not in out:
            out.append(size)
    return out or None
