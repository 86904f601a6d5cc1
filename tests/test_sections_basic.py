from staf2ovs.staf.sections import get_sections


def test_get_sections_splits_rows_by_header():
    text = "\n".join([
        "preamble ignored",
        "*tier",
        "**STAF BAY\tLEVEL\tISO TIER\tVCG",
        "** a comment line",
        "1\tDK\t82\t20.0",
        "",
        "1\tHD\t02\t-",
        "*SLOT",
        "**STAF BAY\tISO ROW",
        "3\t01",
    ])
    out = get_sections(text)
    assert list(out.keys()) == ["TIER", "SLOT"]
    assert out["TIER"][0] == {"STAF BAY": "1", "LEVEL": "DK", "ISO TIER": "82", "VCG": "20.0"}
    # "-" and missing cells are absent
    assert out["TIER"][1]["VCG"] is None
    assert out["SLOT"] == [{"STAF BAY": "3", "ISO ROW": "01"}]


def test_get_sections_short_row_and_repeated_section():
    text = "*LID\n**LID ID\tFWD BAY\nL1\n*LID\n**LID ID\nL2\n"
    out = get_sections(text)
    assert out["LID"] == [{"LID ID": "L1", "FWD BAY": None}, {"LID ID": "L2"}]


def test_get_sections_empty_text():
    assert get_sections("") == {}
