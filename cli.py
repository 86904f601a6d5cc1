#!/usr/bin/env python3
import argparse

from staf2ovs.converter import run_once


def main():
    parser = argparse.ArgumentParser(description="STAF to OpenVesselSpec converter")
    parser.add_argument("--config", help="Path to YAML config")
    parser.add_argument("--input", dest="input", help="STAF file to convert")
    parser.add_argument("--lpp", dest="lpp", type=float, help="Length between perpendiculars (mm)")
    parser.add_argument("--height-factor", dest="height_factor", type=float, help="VCG height factor (default 0.45)")
    parser.add_argument("--out-dir", dest="out_dir", help="Output directory")
    parser.add_argument("--format", dest="formats", action="append", choices=["json", "min.json"], help="Output format (repeatable)")
    parser.add_argument("--validate", dest="validate", action="store_true", help="Validate the produced document")
    parser.add_argument("--no-validate", dest="validate", action="store_false", help="Skip output validation")
    parser.set_defaults(validate=None)
    args = parser.parse_args()

    if not args.config and not (args.input and args.lpp and args.out_dir):
        parser.error("either --config or all of --input, --lpp and --out-dir are required")

    overrides = {
        "input": args.input,
        "lpp": args.lpp,
        "height_factor": args.height_factor,
        "out_dir": args.out_dir,
        "formats": args.formats,
        "validate": args.validate,
    }

    run_once(args.config, overrides=overrides)


if __name__ == "__main__":
    main()
