from staf2ovs.models import BayLevelEnum, ContainerLength
from staf2ovs.stages.hierarchy import (
    add_per_row_info,
    add_per_slot_info,
    add_per_tier_info,
    build_bay_levels,
    level_for_tier,
)
from staf2ovs.stages.index import index_records

A, B = BayLevelEnum.ABOVE, BayLevelEnum.BELOW


def _row(bay, level, row, **kw):
    return {"isoBay": bay, "level": level, "isoRow": row, **kw}


def test_build_bay_levels_discovery_order_and_uniqueness():
    sections = [{"isoBay": 3, "level": A}, {"isoBay": 1, "level": A}, {"isoBay": 3, "level": A}]
    rows = [_row(1, B, "01"), _row(3, A, "01")]
    bls = build_bay_levels(sections, rows)
    assert [bl.key for bl in bls] == ["3-ABOVE", "1-ABOVE", "1-BELOW"]


def test_add_per_row_info_merges_records_per_row():
    bls = build_bay_levels([{"isoBay": 1, "level": A}])
    rows = [
        _row(1, A, "02", tcg=-2500, bottomIsoTier="84", topIsoTier="88"),
        _row(1, A, "01", tcg=2500, bottomIsoTier="82", rowInfoByLength={"20": {"lcg": 1000}, "40": {}}),
        _row(1, A, "02", bottomIsoTier="82", topIsoTier="90"),
    ]
    iso_bays = add_per_row_info(bls, index_records(rows))
    assert iso_bays == [1]
    each = bls[0].per_row_info
    assert list(each.keys()) == ["02", "01"]
    assert each["02"].bottom_iso_tier == "82"
    assert each["02"].top_iso_tier == "90"
    assert each["02"].tcg == -2500
    assert list(each["01"].row_info_by_length) == [ContainerLength.L20]
    assert each["01"].row_info_by_length[ContainerLength.L20].lcg == 1000


def test_add_per_tier_info():
    bls = build_bay_levels([{"isoBay": 1, "level": B}])
    tiers = [{"isoBay": 1, "level": B, "isoTier": "02", "vcg": 1500}, {"isoBay": 1, "level": A, "isoTier": "82"}]
    add_per_tier_info(bls, index_records(tiers))
    assert list(bls[0].per_tier_info) == ["02"]
    assert bls[0].per_tier_info["02"].vcg == 1500


def test_add_per_slot_info_uses_min_above_tier_for_level():
    bls = build_bay_levels([{"isoBay": 1, "level": A}, {"isoBay": 1, "level": B}])
    slots = [
        {"isoBay": 1, "isoRow": "01", "isoTier": "82", "sizes": [ContainerLength.L40], "reefer": True},
        {"isoBay": 1, "isoRow": "01", "isoTier": "10"},
        {"isoBay": 1, "level": A, "isoRow": "03", "isoTier": "90"},
        {"isoBay": 7, "isoRow": "01", "isoTier": "82"},
    ]
    add_per_slot_info(bls, slots, min_above_tier=82)
    above, below = bls
    assert set(above.per_slot_info) == {"0182", "0390"}
    assert above.per_slot_info["0182"].sizes == [ContainerLength.L40]
    assert above.per_slot_info["0182"].reefer is True
    assert set(below.per_slot_info) == {"0110"}


def test_level_for_tier_threshold():
    assert level_for_tier("80", 80) == A
    assert level_for_tier("78", 80) == B
