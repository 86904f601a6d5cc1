import time
import uuid
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional

from staf2ovs.errors import InvalidParameter, NotStafFile
from staf2ovs.helpers import safe_number
from staf2ovs.models import LcgOptions, ShipData, TcgOptions, ValuesSource, VcgOptions
from staf2ovs.staf.mapping import process_all_sections
from staf2ovs.staf.sections import get_sections
from staf2ovs.stages.cleanup import clean_bay_levels, clean_up_document
from staf2ovs.stages.hierarchy import add_per_row_info, add_per_slot_info, add_per_tier_info, build_bay_levels
from staf2ovs.stages.index import index_records
from staf2ovs.stages.labels import extract_labels, get_container_lengths, transform_lids
from staf2ovs.stages.master_cgs import consolidate_master_cgs
from staf2ovs.stages.remap import remap_cgs
from staf2ovs.stages.summary import create_summary
from staf2ovs.utils import load_file, validate_config, validate_document, write_output, get_logger

logger = get_logger(__name__)

STAF_MIN_SECTIONS = ("SHIP", "SECTION", "STACK", "TIER")
DEFAULT_HEIGHT_FACTOR = 0.45


def _check_params(lpp, height_factor) -> None:
    n = safe_number(lpp)
    if n is None or n <= 0:
        raise InvalidParameter(f"lpp must be a positive number, got {lpp!r}")
    if height_factor is not None:
        h = safe_number(height_factor)
        if h is None or h < 0:
            raise InvalidParameter(f"heightFactor must be a non-negative number, got {height_factor!r}")


def staf_to_ovs(file_content: str, lpp: float, height_factor: Optional[float] = DEFAULT_HEIGHT_FACTOR) -> Dict[str, Any]:
    """Convert STAF text into an OpenVesselSpec document.

    ``lpp`` is in millimeters, like every coordinate handled here.
    Raises ``NotStafFile`` before any processing when a mandatory section is missing.
    """
    _check_params(lpp, height_factor)
    if height_factor is None:
        height_factor = DEFAULT_HEIGHT_FACTOR

    sections = get_sections(file_content)
    missing = [name for name in STAF_MIN_SECTIONS if name not in sections]
    if missing:
        logger.warning("converter: missing sections %s", ", ".join(missing))
        raise NotStafFile()

    # 0. Flat records
    data = process_all_sections(sections)
    ship = data.ship
    lcg_options = LcgOptions(**ship.get("lcgOptions", {}), lpp=float(lpp))
    tcg_options = TcgOptions(**ship.get("tcgOptions", {}))
    vcg_options = VcgOptions(**ship.get("vcgOptions", {}), height_factor=height_factor)

    # 1. Indexes by bay-level
    rows_by_key = index_records(data.rows)
    tiers_by_key = index_records(data.tiers)

    # 2. Rows & tiers (tiers only live until the CG remap)
    bls = build_bay_levels(data.bay_levels, data.rows, data.tiers)
    iso_bays = add_per_row_info(bls, rows_by_key)
    add_per_tier_info(bls, tiers_by_key)

    # 3. Slots need minAboveTier from a first summary
    pre_summary = create_summary(iso_bays, bls)
    min_above = pre_summary.get("minAboveTier")
    add_per_slot_info(bls, data.slots, int(min_above) if min_above is not None else None)

    # 4. Labels leave the bay-levels
    position_labels = extract_labels(bls)

    # 5. LCG, TCG & VCG references. Releases perTierInfo
    remap_cgs(bls, lcg_options, vcg_options, tcg_options)

    # 6. Master CGs over normalized values
    master = consolidate_master_cgs(bls)

    # 7. Final summary & ship data
    size_summary = create_summary(iso_bays, bls)
    ship_data = ShipData(
        ship_class=ship.get("shipClass"),
        lcg_options=lcg_options,
        tcg_options=tcg_options,
        vcg_options=vcg_options.model_copy(
            update={
                "values": ValuesSource.ESTIMATED
                if vcg_options.values == ValuesSource.ESTIMATED
                else ValuesSource.KNOWN
            }
        ),
        containers_lengths=get_container_lengths(bls),
        master_cgs=master.to_dict(),
    )

    result = {
        "schema": "OpenVesselSpec",
        "version": "1.0.0",
        "sizeSummary": size_summary,
        "shipData": ship_data.to_ovs(),
        "baysData": clean_bay_levels(bls),
        "positionLabels": position_labels,
        "lidData": transform_lids(data.lids),
    }

    # 8. Final clean-up
    return clean_up_document(result)


def _apply_overrides(cfg: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> None:
    if not overrides:
        return

    if overrides.get("input") is not None:
        cfg["input"] = overrides["input"]
    if overrides.get("lpp") is not None:
        cfg["lpp"] = float(overrides["lpp"])  # type: ignore[arg-type]
    if overrides.get("height_factor") is not None:
        cfg["height_factor"] = float(overrides["height_factor"])  # type: ignore[arg-type]

    if (
        overrides.get("out_dir") is not None
        or overrides.get("formats") is not None
        or overrides.get("validate") is not None
    ):
        out = cfg.setdefault("output", {})
        if overrides.get("out_dir") is not None:
            out["dir"] = overrides["out_dir"]
        if overrides.get("formats") is not None:
            out["formats"] = list(overrides["formats"])
        if overrides.get("validate") is not None:
            out["validate"] = overrides["validate"]


def _execute_conversion(cfg: Dict[str, Any]) -> List[str]:
    input_path = cfg["input"]
    out_cfg = cfg["output"]
    logger.info("config loaded input=%s lpp=%s out=%s", input_path, cfg["lpp"], out_cfg["dir"])

    t0 = time.monotonic()
    content = load_file(input_path)
    doc = staf_to_ovs(content, cfg["lpp"], cfg.get("height_factor", DEFAULT_HEIGHT_FACTOR))
    logger.info("converted bays=%d took_ms=%d", len(doc["baysData"]), int((time.monotonic()-t0)*1000))

    if out_cfg.get("validate", True):
        validate_document(doc)
        logger.info("output document validated")

    generated_files = write_output(doc, out_cfg, Path(input_path).stem)
    logger.info("output written files=%s", ", ".join(generated_files))
    return generated_files


def run_once(
    config_path: Optional[str] = None,
    *,
    overrides: Optional[Dict[str, Any]] = None,
) -> List[str]:
    """Convert once with a YAML config file and/or explicit overrides."""
    run_id = uuid.uuid4().hex[:8]
    logger.info("=== run start id=%s ===", run_id)

    try:
        cfg: Dict[str, Any] = {}
        if config_path:
            with open(config_path, "r", encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}
        _apply_overrides(cfg, overrides)
        validate_config(cfg)
        return _execute_conversion(cfg)

    except Exception as e:
        logger.error("conversion failed: %s", e)
        raise
    finally:
        logger.info("=== run end id=%s ===", run_id)
