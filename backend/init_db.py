"""
Load drug data into the drugs table, replacing whatever is there.
Run from backend/ directory:
    python init_db.py [path/to/drugData.json]

Without an argument the file at DRUG_DATA_PATH is used; when that file
does not exist a small built-in sample is loaded instead.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.dirname(__file__))

from druglist.config import Config
from druglist.errors import DrugListError
from druglist.main import create_app
from druglist.services.drug_ingestion_service import ingest_file, ingest_payload

SAMPLE_DRUGS = [
    {
        "code": "0006-0568",
        "genericName": "vorinostat",
        "brandName": "ZOLINZA",
        "company": "Merck Sharp & Dohme Corp.",
        "launchDate": "2004-02-14T23:01:10Z",
    },
    {
        "code": "0006-1234",
        "genericName": "imatinib",
        "brandName": "GLEEVEC",
        "company": "Novartis Pharmaceuticals Corporation",
        "launchDate": "2001-05-10T00:00:00Z",
    },
    {
        "code": "0006-5678",
        "genericName": "trastuzumab",
        "brandName": "HERCEPTIN",
        "company": "Genentech, Inc.",
        "launchDate": "1998-09-25T00:00:00Z",
    },
]

SUPPORTED_FORMATS = """Supported JSON formats:
- Array of drug objects: [{"code": "...", "genericName": "...", ...}]
- Object with drugs array: {"drugs": [{"code": "...", ...}]}
- Object with data array: {"data": [{"code": "...", ...}]}"""


def main(argv=None, app=None) -> int:
    parser = argparse.ArgumentParser(description="Replace the drugs table with data from a JSON file.")
    parser.add_argument("input", nargs="?", default=Config.DRUG_DATA_PATH,
                        help="drug JSON file (default: DRUG_DATA_PATH)")
    args = parser.parse_args(argv)

    data_path = Path(args.input)
    try:
        if data_path.exists():
            print(f"Reading drug data from {data_path}...")
            report = ingest_file(data_path)
        else:
            print(f"No drug data file found at {data_path}, using sample data")
            report = ingest_payload(SAMPLE_DRUGS)
    except DrugListError as exc:
        print(f"Error processing {data_path}: {exc.message}", file=sys.stderr)
        return 1

    print(f"Found {report.total_count} drug records, {report.valid_count} valid, "
          f"{report.invalid_count} skipped")

    app = app or create_app()
    with app.app_context():
        store = app.extensions["drug_store"]
        try:
            store.replace_all(report.valid_records)
            print(f"Successfully inserted {store.count()} drug records")
            print("\nSample of inserted data:")
            for drug in store.sample(3):
                print(f"- {drug.display_name} - {drug.company}")
        except DrugListError as exc:
            print(f"Database error: {exc.message}", file=sys.stderr)
            return 1
        finally:
            store.close()

    print("\nDatabase initialization completed successfully")
    print("\nTo add your own drug data:")
    print(f"1. Place your JSON file at: {Config.DRUG_DATA_PATH}")
    print("2. Re-run: python init_db.py")
    print("\n" + SUPPORTED_FORMATS)
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(main())
