"""
Convert a drug JSON file with arbitrary field names into the canonical
format, dropping records that lack a generic name, brand name or company.
Run from backend/ directory:
    python convert_data.py input-file.json [output-file.json]
"""

import argparse
import json
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(__file__))

from druglist.errors import DrugListError
from druglist.services.drug_ingestion_service import ingest_file

DEFAULT_OUTPUT = "converted-drug-data.json"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Map common drug field names onto the canonical format.",
    )
    parser.add_argument("input", help="source JSON file")
    parser.add_argument("output", nargs="?", default=DEFAULT_OUTPUT,
                        help=f"destination file (default: {DEFAULT_OUTPUT})")
    args = parser.parse_args(argv)

    print(f"Reading data from: {args.input}")
    try:
        report = ingest_file(args.input)
    except DrugListError as exc:
        print(f"Error processing file: {exc.message}", file=sys.stderr)
        return 1

    print(f"Found {report.total_count} drug records")
    print(f"Converted {report.valid_count} valid drug records")

    records = [r.to_dict() for r in report.valid_records]
    try:
        with open(args.output, "w", encoding="utf-8") as fh:
            json.dump(records, fh, indent=2)
    except OSError as exc:
        print(f"Error writing {args.output}: {exc}", file=sys.stderr)
        return 1
    print(f"Converted data written to: {args.output}")

    print("\nSample of converted data:")
    for i, record in enumerate(report.valid_records[:3], 1):
        print(f"{i}. {record.generic_name} ({record.brand_name}) - {record.company}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(main())
