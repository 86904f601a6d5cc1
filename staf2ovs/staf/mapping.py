"""Declarative STAF section → flat record tables and their generic applier."""

from __future__ import annotations

import typing as t
from dataclasses import dataclass, field

from staf2ovs.helpers import (
    iso_bay,
    pad2,
    pad3,
    safe_number_mt_to_mm,
    safe_number_tons_to_grams,
    staf_fore_aft,
    staf_lcg_reference,
    staf_level,
    staf_port_starboard,
    staf_sizes,
    staf_values_by_tier,
    staf_values_known,
    yn_to_bool,
)
from staf2ovs.models import ContainerLength
from staf2ovs.staf.sections import Sections
from staf2ovs.utils import get_logger

logger = get_logger(__name__)

Mapper = t.Callable[[str], t.Any]


@dataclass(frozen=True)
class FieldMap:
    staf_var: str
    target: str
    mapper: t.Optional[Mapper] = None


@dataclass(frozen=True)
class SectionConfig:
    staf_section: str
    map_vars: t.Tuple[FieldMap, ...]
    required: t.Tuple[str, ...] = ()
    single_row: bool = False


@dataclass
class StafData:
    ship: dict = field(default_factory=dict)
    bay_levels: t.List[dict] = field(default_factory=list)
    rows: t.List[dict] = field(default_factory=list)
    tiers: t.List[dict] = field(default_factory=list)
    slots: t.List[dict] = field(default_factory=list)
    lids: t.List[dict] = field(default_factory=list)


def _per_length(template: str, target: str, mapper: Mapper) -> t.Tuple[FieldMap, ...]:
    return tuple(
        FieldMap(template.format(n=int(size)), target.format(n=int(size)), mapper)
        for size in ContainerLength
    )


SHIP_CONFIG = SectionConfig(
    staf_section="SHIP",
    single_row=True,
    map_vars=(
        FieldMap("CLASS", "shipClass"),
        FieldMap("LCG IN USE", "lcgOptions.values", staf_values_known),
        FieldMap("LCG REF PT", "lcgOptions.reference", staf_lcg_reference),
        FieldMap("LCG + DIRECTION", "lcgOptions.orientationIncrease", staf_fore_aft),
        FieldMap("VCG IN USE", "vcgOptions.values", staf_values_by_tier),
        FieldMap("TCG IN USE", "tcgOptions.values", staf_values_known),
        FieldMap("TCG + DIRECTION", "tcgOptions.direction", staf_port_starboard),
    ),
)

BAY_LEVEL_CONFIG = SectionConfig(
    staf_section="SECTION",
    required=("isoBay", "level"),
    map_vars=(
        FieldMap("STAF BAY", "isoBay", iso_bay),
        FieldMap("LEVEL", "level", staf_level),
        FieldMap("20 NAME", "label20"),
        FieldMap("40 NAME", "label40"),
    )
    + _per_length("LCG {n}", "infoByContLength.{n}.lcg", safe_number_mt_to_mm)
    + _per_length("STACK WT {n}", "infoByContLength.{n}.stackWeight", safe_number_tons_to_grams)
    + (
        FieldMap("MAX HEIGHT", "maxHeight", safe_number_mt_to_mm),
        FieldMap("PAIRED BAY", "pairedBay", staf_fore_aft),
        FieldMap("DOORS", "doors", staf_fore_aft),
        FieldMap("ATHWARTSHIPS", "athwartShip", yn_to_bool),
        FieldMap("BULKHEAD", "bulkhead.fore", yn_to_bool),
        FieldMap("BULKHEAD LCG", "bulkhead.foreLcg", safe_number_mt_to_mm),
        FieldMap("BULKHEAD AFT LCG", "bulkhead.aftLcg", safe_number_mt_to_mm),
    ),
)

ROW_CONFIG = SectionConfig(
    staf_section="STACK",
    required=("isoBay", "level", "isoRow"),
    map_vars=(
        FieldMap("STAF BAY", "isoBay", iso_bay),
        FieldMap("LEVEL", "level", staf_level),
        FieldMap("ISO ROW", "isoRow", pad2),
        FieldMap("TCG", "tcg", safe_number_mt_to_mm),
        FieldMap("BOTTOM TIER", "bottomIsoTier", pad2),
        FieldMap("TOP TIER", "topIsoTier", pad2),
        FieldMap("BOTTOM BASE", "bottomBase", safe_number_mt_to_mm),
        FieldMap("MAX HEIGHT", "maxHeight", safe_number_mt_to_mm),
    )
    + _per_length("LCG {n}", "rowInfoByLength.{n}.lcg", safe_number_mt_to_mm),
)

TIER_CONFIG = SectionConfig(
    staf_section="TIER",
    required=("isoBay", "level", "isoTier"),
    map_vars=(
        FieldMap("STAF BAY", "isoBay", iso_bay),
        FieldMap("LEVEL", "level", staf_level),
        FieldMap("ISO TIER", "isoTier", pad2),
        FieldMap("VCG", "vcg", safe_number_mt_to_mm),
    ),
)

SLOT_CONFIG = SectionConfig(
    staf_section="SLOT",
    required=("isoBay", "isoRow", "isoTier"),
    map_vars=(
        FieldMap("STAF BAY", "isoBay", iso_bay),
        FieldMap("LEVEL", "level", staf_level),
        FieldMap("ISO ROW", "isoRow", pad2),
        FieldMap("ISO TIER", "isoTier", pad2),
        FieldMap("SIZES", "sizes", staf_sizes),
        FieldMap("REEFER", "reefer", yn_to_bool),
        FieldMap("RESTRICTED", "restricted", yn_to_bool),
    ),
)

LID_CONFIG = SectionConfig(
    staf_section="LID",
    required=("label",),
    map_vars=(
        FieldMap("LID ID", "label"),
        FieldMap("FWD BAY", "startIsoBay", pad3),
        FieldMap("AFT BAY", "endIsoBay", pad3),
        FieldMap("PORT ROW", "portIsoRow", pad2),
        FieldMap("STBD ROW", "starboardIsoRow", pad2),
        FieldMap("WEIGHT", "weight", safe_number_tons_to_grams),
    ),
)

# StafData attribute -> table
SECTION_CONFIGS: t.Dict[str, SectionConfig] = {
    "ship": SHIP_CONFIG,
    "bay_levels": BAY_LEVEL_CONFIG,
    "rows": ROW_CONFIG,
    "tiers": TIER_CONFIG,
    "slots": SLOT_CONFIG,
    "lids": LID_CONFIG,
}


def _set_path(obj: dict, path: str, value) -> None:
    parts = path.split(".")
    for p in parts[:-1]:
        obj = obj.setdefault(p, {})
    obj[parts[-1]] = value


def _has_path(obj: dict, path: str) -> bool:
    for p in path.split("."):
        if not isinstance(obj, dict) or obj.get(p) is None:
            return False
        obj = obj[p]
    return True


def apply_section_config(rows: t.List[dict], config: SectionConfig) -> t.List[dict]:
    out: t.List[dict] = []
    dropped = 0
    for raw in rows:
        rec: dict = {}
        for fm in config.map_vars:
            raw_v = raw.get(fm.staf_var)
            if raw_v is None:
                continue
            v = fm.mapper(raw_v) if fm.mapper else raw_v
            if v is None:
                continue
            _set_path(rec, fm.target, v)
        if not all(_has_path(rec, req) for req in config.required):
            dropped += 1
            continue
        out.append(rec)
        if config.single_row:
            break
    if dropped:
        logger.warning("staf.mapping: %s dropped=%d (missing %s)", config.staf_section, dropped, ", ".join(config.required))
    return out


def process_all_sections(sections: Sections) -> StafData:
    data = StafData()
    known = {cfg.staf_section for cfg in SECTION_CONFIGS.values()}
    for name in sections:
        if name not in known:
            logger.debug("staf.mapping: ignoring section %s", name)

    for attr, cfg in SECTION_CONFIGS.items():
        records = apply_section_config(sections.get(cfg.staf_section, []), cfg)
        if cfg.single_row:
            setattr(data, attr, records[0] if records else {})
        else:
            setattr(data, attr, records)

    logger.info(
        "staf.mapping: bay_levels=%d rows=%d tiers=%d slots=%d lids=%d",
        len(data.bay_levels), len(data.rows), len(data.tiers), len(data.slots), len(data.lids),
    )
    return data
