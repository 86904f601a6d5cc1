"""Rewrite LCG/TCG/VCG values into the OVS reference frame.

Output frame: LCG measured from the aft perpendicular increasing forward,
TCG positive to starboard, VCG expressed per row as ``bottom_base``.
All functions mutate the bay-levels in place.
"""

from __future__ import annotations

from functools import partial
from typing import List, Optional

from staf2ovs.helpers import round_half_up
from staf2ovs.models import (
    BayLevel,
    ForeAft,
    KnownEstimated,
    LcgOptions,
    LcgReference,
    PortStarboard,
    TcgOptions,
    ValuesSource,
    VcgOptions,
)
from staf2ovs.utils import get_logger

logger = get_logger(__name__)

ONE_MILLIMETER_IN_FEET = 0.003280839895
# Height of a standard 8'6" container
STANDARD_HEIGHT_FEET = 8.5


def _is_number(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def rebase_lcg(value: float, options: LcgOptions) -> float:
    sign = 1 if options.orientation_increase == ForeAft.FWD else -1
    lpp = options.lpp or 0
    if options.reference == LcgReference.FWD_PERPENDICULAR:
        return lpp - value * sign
    if options.reference == LcgReference.MIDSHIPS:
        return lpp * 0.5 + value * sign
    return value * sign


def base_adjust(height_factor: Optional[float]) -> int:
    return round_half_up((STANDARD_HEIGHT_FEET / ONE_MILLIMETER_IN_FEET) * (height_factor or 0))


def remap_lcgs(options: LcgOptions, bls: List[BayLevel]) -> int:
    rebase = partial(rebase_lcg, options=options)
    n = 0
    for bl in bls:
        for info in bl.info_by_cont_length.values():
            if info.lcg is not None:
                info.lcg = rebase(info.lcg)
                n += 1

        if bl.bulkhead:
            if bl.bulkhead.fore_lcg is not None:
                bl.bulkhead.fore_lcg = rebase(bl.bulkhead.fore_lcg)
                n += 1
            if bl.bulkhead.aft_lcg is not None:
                bl.bulkhead.aft_lcg = rebase(bl.bulkhead.aft_lcg)
                n += 1

        for row in bl.per_row_info.values():
            for by_len in row.row_info_by_length.values():
                if by_len.lcg is not None:
                    by_len.lcg = rebase(by_len.lcg)
                    n += 1
    return n


def remap_vcgs(options: VcgOptions, bls: List[BayLevel]) -> int:
    adjust = base_adjust(options.height_factor)
    n = 0
    for bl in bls:
        tiers = bl.per_tier_info or {}
        for row in bl.per_row_info.values():
            if row.bottom_iso_tier is None:
                continue
            tier = tiers.get(row.bottom_iso_tier)
            if tier is not None and tier.vcg is not None:
                row.bottom_base = tier.vcg - adjust
                n += 1
        bl.per_tier_info = None
    return n


def remap_tcgs(options: TcgOptions, bls: List[BayLevel]) -> int:
    sign = 1 if options.direction == PortStarboard.STARBOARD else -1
    n = 0
    for bl in bls:
        for row in bl.per_row_info.values():
            if _is_number(row.tcg):
                row.tcg = sign * row.tcg
                n += 1
    return n


def remap_cgs(
    bls: List[BayLevel],
    lcg_options: LcgOptions,
    vcg_options: VcgOptions,
    tcg_options: TcgOptions,
) -> None:
    """Apply the three remaps once and release every ``per_tier_info``.

    Must run after all row/tier merging and before master CG consolidation.
    """
    consumed = [bl.key for bl in bls if bl.per_tier_info is None]
    if consumed:
        raise RuntimeError(f"CG remap already applied to bay-levels: {', '.join(consumed)}")

    n_lcg = n_vcg = n_tcg = 0
    if lcg_options.values == KnownEstimated.KNOWN:
        n_lcg = remap_lcgs(lcg_options, bls)
    if vcg_options.values == ValuesSource.BY_TIER:
        n_vcg = remap_vcgs(vcg_options, bls)
    if tcg_options.values == KnownEstimated.KNOWN:
        n_tcg = remap_tcgs(tcg_options, bls)

    for bl in bls:
        bl.per_tier_info = None

    logger.info("remap: lcgs=%d bottom_bases=%d tcgs=%d", n_lcg, n_vcg, n_tcg)
