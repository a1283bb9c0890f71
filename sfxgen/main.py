#!/usr/bin/env python3
"""
Regenerate every sound asset.

Usage:
    sfxgen [options]
    python -m sfxgen.main [options]

Options:
    --output-dir <path>   Output directory (default: public/sounds)
    --only <name>         Render only this asset (repeatable)
    --seed <int>          Fixed noise seed (default: fresh noise every run)
    --qc                  Run QC analysis and read every file back
    --list                List asset names and exit
    -v, --verbose         Debug logging
"""
import argparse
import logging
import sys

from sfxgen.core.config import DEFAULT_CONFIG
from sfxgen.core.types import RenderReport
from sfxgen.export.exporter import Exporter, asset_names

logger = logging.getLogger("sfxgen")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfxgen",
        description="Procedurally generate game sound effects and background music as WAV files.",
    )
    parser.add_argument("--output-dir", default=None, help="Output directory (default: public/sounds)")
    parser.add_argument("--only", action="append", default=None, metavar="NAME", help="Render only this asset")
    parser.add_argument("--seed", type=int, default=None, help="Fixed noise seed")
    parser.add_argument("--qc", action="store_true", help="Run QC analysis on every asset")
    parser.add_argument("--list", action="store_true", help="List asset names and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def print_report(report: RenderReport) -> None:
    print(f"  {report.path.name}  ({report.size_kb:.1f} KB, {report.elapsed_ms:.0f}ms)")
    qc = report.qc_result
    if qc is None:
        return
    if qc["status"] != "PASS":
        print(f"    QC Status: {qc['status']}")
    for f in qc["failures"]:
        print(f"    - FAIL: {f}")
    for w in qc["warnings"]:
        print(f"    - WARN: {w}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        for name in asset_names():
            print(name)
        return 0

    config = DEFAULT_CONFIG
    if args.output_dir:
        config = config.with_output_dir(args.output_dir)
    logger.debug("render config: %s", config)

    known = asset_names()
    unknown = [n for n in args.only or [] if n not in known]
    if unknown:
        print(f"Error: unknown asset(s): {', '.join(unknown)}")
        print(f"Available assets: {', '.join(known)}")
        return 2

    exporter = Exporter(config, seed=args.seed, qc=args.qc)
    print("Generating sounds...\n")
    try:
        reports = exporter.export_all(args.only, on_report=print_report)
    except OSError as e:
        print(f"Error: {e}")
        return 1

    print(f"\nDone! {len(reports)} sounds generated in {config.output_dir}/")

    if args.qc:
        failed = [r.name for r in reports if r.qc_result and r.qc_result["status"] == "FAIL"]
        if failed:
            print(f"\nQC FAILURES ({len(failed)}): {', '.join(failed)}")
            return 1
        print("All renders PASSED QC checks!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
