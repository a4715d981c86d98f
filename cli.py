#!/usr/bin/env python
"""
Command-line interface for Parcel Memorial Generator

Usage:
    python cli.py generate --input drawing.geojson --output memorial.json
    python cli.py classify --input drawing.geojson --parcel "Lot 07" --frontage 2
"""

import os
import sys
import json
import argparse
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from loguru import logger
from memorial.config import load_config
from memorial.collectors import load_geojson
from memorial.errors import MemorialError
from memorial.pipeline import MemorialPipeline
from memorial.analysis import confrontation_rows, group_summaries, format_azimuth


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def parse_frontage_overrides(values):
    """Parse NAME=INDEX pairs into a dict"""
    overrides = {}
    for value in values or []:
        name, sep, index = value.rpartition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=INDEX, got {value!r}")
        overrides[name] = int(index)
    return overrides


def _build_pipeline(args):
    config = load_config(args.env_file)
    if args.tolerance is not None:
        config.confronting.tolerance = args.tolerance
    return config, MemorialPipeline(config)


def _load_drawing(path, config):
    """Load the input drawing, logging read and format errors"""
    try:
        return load_geojson(path, config)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {path}: {e}")
        return None


def cmd_generate(args):
    """Process every parcel in a drawing"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    try:
        config, pipeline = _build_pipeline(args)
        overrides = parse_frontage_overrides(args.frontage)
    except ValueError as e:
        logger.error(str(e))
        return 1

    drawing = _load_drawing(args.input, config)
    if drawing is None:
        return 1
    if not drawing.parcels:
        logger.error("No parcels found in input")
        return 1

    result = pipeline.run(drawing.parcels, drawing.alignments, frontage_overrides=overrides)

    output_path = args.output or os.path.join(
        config.output_dir, f"memorial_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
    )
    pipeline.save(result, output_path)

    logger.info(f"✓ Generated: {output_path}")
    logger.info(f"  Parcels: {len(result.parcels)}")
    logger.info(f"  Total area: {result.total_area:.2f}")
    for warning in result.warnings:
        logger.warning(f"  [{warning.code}] {warning.parcel_name}: {warning.message}")

    # Print summary to stdout if requested
    if args.summary:
        summary = {
            "parcels": len(result.parcels),
            "warnings": len(result.warnings),
            "total_area": round(result.total_area, 3),
            "groups": [
                {
                    "group": g.group,
                    "count": g.count,
                    "total_area": round(g.total_area, 3),
                }
                for g in group_summaries(result.parcels)
            ],
        }
        print(json.dumps(summary, indent=2, ensure_ascii=False))

    # Skipped parcels make the run partial; names may repeat, so compare counts
    return 0 if len(result.parcels) == len(drawing.parcels) else 2


def cmd_classify(args):
    """Reclassify one parcel with a chosen frontage side and print it"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    try:
        config, pipeline = _build_pipeline(args)
    except ValueError as e:
        logger.error(str(e))
        return 1

    drawing = _load_drawing(args.input, config)
    if drawing is None:
        return 1
    result = pipeline.run(drawing.parcels, drawing.alignments)

    parcel = result.get_parcel(args.parcel)
    if parcel is None:
        logger.error(f"Parcel not found or not processed: {args.parcel}")
        return 1

    try:
        parcel = pipeline.reclassify(parcel, args.frontage)
    except MemorialError as e:
        logger.error(str(e))
        return 1

    print(f"{parcel.name} ({parcel.shape}) - {parcel.group}")
    for i, side in enumerate(parcel.sides):
        print(f"  [{i}] V{side.from_vertex}->V{side.to_vertex}  "
              f"{format_azimuth(side.azimuth_degrees)}  {side.length:10.3f}  "
              f"{side.face_role.value:<12} {side.confrontant}")
    print()
    for label, description in confrontation_rows(parcel):
        print(f"  {label:<10} {description}")
    print()
    print(parcel.narrative)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Parcel Memorial Generator CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Process a drawing:
    python cli.py generate --input drawing.geojson --output memorial.json

  Override frontage sides:
    python cli.py generate --input drawing.geojson --frontage "Lot 07=2" --frontage "Lot 08=0"

  Review one parcel:
    python cli.py classify --input drawing.geojson --parcel "Lot 07" --frontage 2
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--input", "-i", required=True, help="Input GeoJSON file")
    common.add_argument("--tolerance", "-t", type=float, help="Confronting tolerance (drawing units)")
    common.add_argument("--env-file", help="Path to a .env file with MEMORIAL_* settings")

    # Generate command
    gen_parser = subparsers.add_parser("generate", parents=[common], help="Process all parcels in a drawing")
    gen_parser.add_argument("--output", "-o", help="Output JSON file")
    gen_parser.add_argument("--frontage", "-f", action="append", metavar="NAME=INDEX",
                            help="Frontage side index for a parcel (repeatable)")
    gen_parser.add_argument("--summary", "-s", action="store_true", help="Print summary to stdout")
    gen_parser.set_defaults(func=cmd_generate)

    # Classify command
    cls_parser = subparsers.add_parser("classify", parents=[common], help="Reclassify one parcel")
    cls_parser.add_argument("--parcel", "-p", required=True, help="Parcel name")
    cls_parser.add_argument("--frontage", "-f", type=int, required=True, help="Frontage side index (0-based)")
    cls_parser.set_defaults(func=cmd_classify)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
