"""
Drug ingestion service – turns a raw JSON payload into canonical records.

Flow:
  1. Parse the JSON source (file or request body).
  2. Classify the payload shape and locate the drug array:
       bare list  |  {"drugs": [...]}  |  {"data": [...]}
  3. Normalize every element with its position in the batch.
  4. Partition into valid records and invalid-record diagnostics.

Persistence is not done here; callers hand `report.valid_records` to
DrugStore.replace_all() explicitly.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from druglist.errors import MalformedInputError
from druglist.services.drug_normalizer import CanonicalDrugRecord, is_valid, normalize_record

logger = logging.getLogger("druglist.ingestion")


class PayloadShape(Enum):
    BARE_ARRAY = "array"
    DRUGS_ARRAY = "drugs"
    DATA_ARRAY = "data"
    UNRECOGNIZED = "unrecognized"


@dataclass
class InvalidRecord:
    """Diagnostic entry for a record that failed the validity check."""
    index: int
    original: Any
    normalized: CanonicalDrugRecord

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "original": self.original,
            "normalized": self.normalized.to_dict(),
            "missing": self.normalized.missing_fields(),
        }


@dataclass
class IngestionReport:
    total_count: int = 0
    shape: PayloadShape = PayloadShape.UNRECOGNIZED
    valid_records: list[CanonicalDrugRecord] = field(default_factory=list)
    invalid_records: list[InvalidRecord] = field(default_factory=list)

    @property
    def valid_count(self) -> int:
        return len(self.valid_records)

    @property
    def invalid_count(self) -> int:
        return len(self.invalid_records)

    def to_dict(self) -> dict:
        return {
            "shape": self.shape.value,
            "totalCount": self.total_count,
            "validCount": self.valid_count,
            "invalidCount": self.invalid_count,
            "invalidDiagnostics": [r.to_dict() for r in self.invalid_records],
        }


def classify_payload(payload: Any) -> tuple[PayloadShape, Optional[list]]:
    """Decide which of the known top-level shapes *payload* has."""
    if isinstance(payload, list):
        return PayloadShape.BARE_ARRAY, payload
    if isinstance(payload, dict):
        if isinstance(payload.get("drugs"), list):
            return PayloadShape.DRUGS_ARRAY, payload["drugs"]
        if isinstance(payload.get("data"), list):
            return PayloadShape.DATA_ARRAY, payload["data"]
    return PayloadShape.UNRECOGNIZED, None


def extract_records(payload: Any) -> list:
    """Return the drug array inside *payload* or raise MalformedInputError."""
    shape, records = classify_payload(payload)
    if shape is PayloadShape.UNRECOGNIZED:
        raise MalformedInputError(
            "Could not find an array of drugs in the JSON payload. "
            'Expected a list, {"drugs": [...]} or {"data": [...]}.',
            details={"type": type(payload).__name__},
        )
    return records


def parse_json_text(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise MalformedInputError(f"Input is not valid JSON: {exc}") from exc


def load_json_file(path) -> Any:
    """Read and parse a JSON file; unreadable or unparseable files are malformed input."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MalformedInputError(f"Could not read {path}: {exc}") from exc
    return parse_json_text(text)


def ingest_payload(payload: Any, now: Optional[datetime] = None) -> IngestionReport:
    """
    Normalize every drug object in *payload* and split valid from invalid.

    *now* is the timestamp used for records without a launch date; it
    defaults to the start of the run so all such records share one value.
    """
    shape, _ = classify_payload(payload)
    raw_records = extract_records(payload)
    now = now or datetime.now(timezone.utc)

    report = IngestionReport(total_count=len(raw_records), shape=shape)
    logger.info("Found %d drug records (%s)", report.total_count, shape.value)

    for index, raw in enumerate(raw_records):
        record = normalize_record(raw, index, now=now)
        if is_valid(record):
            report.valid_records.append(record)
            continue
        logger.warning(
            "Record %d missing required fields %s: original=%r normalized=%r",
            index + 1, record.missing_fields(), raw, record.to_dict(),
        )
        report.invalid_records.append(InvalidRecord(index=index, original=raw, normalized=record))

    logger.info(
        "Converted %d valid drug records (%d invalid)",
        report.valid_count, report.invalid_count,
    )
    return report


def ingest_file(path, now: Optional[datetime] = None) -> IngestionReport:
    return ingest_payload(load_json_file(path), now=now)
