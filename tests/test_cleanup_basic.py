from staf2ovs.models import BayLevel, BayLevelEnum, ContainerLength, LengthInfo, RowInfo, SlotInfo, TierInfo, UsesMaster
from staf2ovs.stages.cleanup import TRANSIENT_KEYS, bay_level_to_dict, clean_bay_levels, clean_up_document, prune


def test_prune_drops_empty_and_transient_fields():
    obj = {
        "a": None,
        "b": {},
        "c": {"d": {"e": None}},
        "perTierInfo": {"82": {"vcg": 1}},
        "label20": "01",
        "n": 151000.0,
        "x": 0.45,
        "flag": False,
        "items": [{"k": None, "v": 1}],
    }
    assert prune(obj, TRANSIENT_KEYS) == {"n": 151000, "x": 0.45, "flag": False, "items": [{"v": 1}]}
    # without a drop set every key with a value survives
    assert prune(obj)["label20"] == "01"


def test_clean_bay_levels_omits_master_placeholders():
    bl = BayLevel(iso_bay=1, level=BayLevelEnum.ABOVE, label20="01")
    bl.info_by_cont_length = {ContainerLength.L20: LengthInfo(lcg=200500.0)}
    bl.per_row_info = {"00": RowInfo(iso_row="00", tcg=UsesMaster("00", 0), bottom_iso_tier="82", bottom_base=-5)}
    bl.per_tier_info = {"82": TierInfo(iso_tier="82", vcg=1)}
    bl.per_slot_info = {"0082": SlotInfo(sizes=[ContainerLength.L20], reefer=False)}
    [out] = clean_bay_levels([bl])
    assert out == {
        "isoBay": "001",
        "level": "ABOVE",
        "infoByContLength": {"20": {"lcg": 200500}},
        "perRowInfo": {"each": {"00": {"bottomIsoTier": "82", "bottomBase": -5}}},
        "perSlotInfo": {"0082": {"sizes": {"20": 1}, "reefer": False}},
    }
    assert "perTierInfo" not in bay_level_to_dict(bl)


def test_clean_up_document_keeps_top_level_keys():
    doc = {"schema": "OpenVesselSpec", "sizeSummary": {"maxRow": None, "isoBays": 1}, "extra": None}
    out = clean_up_document(doc)
    assert out == {"schema": "OpenVesselSpec", "sizeSummary": {"isoBays": 1}}


def test_clean_up_document_passes_labels_and_lids_through():
    labels = {"bayNames": {"001": {"label20": "01", "label40": "02"}}}
    lids = [{"label": "L1", "startIsoBay": "001"}]
    doc = {
        "positionLabels": labels,
        "lidData": lids,
        "baysData": [{"isoBay": "001", "label20": "01", "perTierInfo": {"82": {"vcg": 1}}}],
    }
    out = clean_up_document(doc)
    assert out["positionLabels"] == {"bayNames": {"001": {"label20": "01", "label40": "02"}}}
    assert out["lidData"] == [{"label": "L1", "startIsoBay": "001"}]
    # transient fields only go away inside the bay-levels
    assert out["baysData"] == [{"isoBay": "001"}]
