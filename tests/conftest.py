import os

# keep test runs from writing log files
os.environ.setdefault("LOG_DIR", "")

import pytest


def _section(name, header, rows):
    lines = [f"*{name}", "**" + "\t".join(header)]
    lines += ["\t".join(r) for r in rows]
    return lines


def build_staf(skip=()):
    parts = {
        "SHIP": _section(
            "SHIP",
            ["CLASS", "UNITS", "LCG IN USE", "LCG REF PT", "LCG + DIRECTION", "VCG IN USE", "TCG IN USE", "TCG + DIRECTION"],
            [["TESTCLASS", "METRIC", "Y", "MS", "F", "Y", "Y", "S"]],
        ),
        "SECTION": _section(
            "SECTION",
            ["STAF BAY", "LEVEL", "20 NAME", "40 NAME", "LCG 20", "LCG 40", "STACK WT 20", "STACK WT 40",
             "PAIRED BAY", "DOORS", "ATHWARTSHIPS", "BULKHEAD", "BULKHEAD LCG"],
            [
                ["1", "DK", "01", "02", "100.5", "-", "60", "-", "F", "A", "Y", "N", "-"],
                ["1", "HD", "01", "02", "100.5", "-", "80", "-", "F", "A", "N", "Y", "103.0"],
                ["3", "DK", "03", "02", "90.25", "94", "60", "90", "A", "A", "Y", "N", "-"],
            ],
        ),
        "STACK": _section(
            "STACK",
            ["STAF BAY", "LEVEL", "ISO ROW", "TCG", "BOTTOM TIER", "TOP TIER", "LCG 20"],
            [
                ["1", "DK", "00", "0", "82", "88", "100.5"],
                ["1", "DK", "01", "2.5", "82", "88", "-"],
                ["1", "DK", "02", "-2.5", "82", "86", "-"],
                ["1", "HD", "00", "0", "02", "08", "-"],
                ["1", "HD", "01", "2.5", "04", "08", "-"],
                ["3", "DK", "00", "0", "82", "88", "-"],
                ["3", "DK", "01", "2.5", "82", "88", "-"],
                ["3", "DK", "02", "-2.4", "84", "88", "-"],
            ],
        ),
        "TIER": _section(
            "TIER",
            ["STAF BAY", "LEVEL", "ISO TIER", "VCG"],
            [
                ["1", "DK", "82", "20.0"],
                ["1", "DK", "84", "22.6"],
                ["1", "HD", "02", "1.5"],
                ["1", "HD", "04", "4.1"],
                ["3", "DK", "82", "20.0"],
                ["3", "DK", "84", "22.6"],
            ],
        ),
        "SLOT": _section(
            "SLOT",
            ["STAF BAY", "ISO ROW", "ISO TIER", "SIZES", "REEFER"],
            [
                ["1", "01", "88", "20/40", "Y"],
                ["1", "00", "04", "20", "N"],
            ],
        ),
        "LID": _section(
            "LID",
            ["LID ID", "FWD BAY", "AFT BAY", "PORT ROW", "STBD ROW"],
            [["L1", "1", "3", "02", "01"]],
        ),
    }
    lines = ["STAF test vessel"]
    for name, section_lines in parts.items():
        if name not in skip:
            lines += section_lines
    return "\n".join(lines) + "\n"


@pytest.fixture
def staf_text():
    return build_staf()
