"""
Batch ingestion tests – payload shape detection, partitioning and
diagnostics, plus JSON parsing failures.
"""

import json
from datetime import datetime, timezone

import pytest

from druglist.errors import MalformedInputError
from druglist.services.drug_ingestion_service import (
    PayloadShape,
    classify_payload,
    extract_records,
    ingest_file,
    ingest_payload,
    load_json_file,
    parse_json_text,
)

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)

ITEMS = [
    {"code": "C1", "genericName": "imatinib", "brandName": "GLEEVEC", "company": "Novartis"},
    {"drugCode": "C2", "generic_name": "vorinostat", "brand_name": "ZOLINZA", "manufacturer": "Merck"},
    {"genericName": "orphan"},
]


class TestClassifyPayload:
    @pytest.mark.parametrize("payload,shape", [
        ([], PayloadShape.BARE_ARRAY),
        ({"drugs": []}, PayloadShape.DRUGS_ARRAY),
        ({"data": []}, PayloadShape.DATA_ARRAY),
        ({"drugs": {}, "data": [1]}, PayloadShape.DATA_ARRAY),
        ({"items": []}, PayloadShape.UNRECOGNIZED),
        ({"drugs": "nope"}, PayloadShape.UNRECOGNIZED),
        ("text", PayloadShape.UNRECOGNIZED),
        (None, PayloadShape.UNRECOGNIZED),
    ])
    def test_shapes(self, payload, shape):
        assert classify_payload(payload)[0] is shape

    def test_drugs_preferred_over_data(self):
        shape, records = classify_payload({"drugs": [1], "data": [2]})
        assert shape is PayloadShape.DRUGS_ARRAY
        assert records == [1]

    def test_unrecognized_raises(self):
        with pytest.raises(MalformedInputError):
            extract_records({"results": [ITEMS[0]]})


class TestIngestPayload:
    def test_partitions_valid_and_invalid(self):
        report = ingest_payload(ITEMS, now=NOW)
        assert report.total_count == 3
        assert report.valid_count == 2
        assert report.invalid_count == 1
        assert [r.code for r in report.valid_records] == ["C1", "C2"]

    def test_invalid_diagnostics_keep_original_and_normalized(self):
        report = ingest_payload(ITEMS, now=NOW)
        bad = report.invalid_records[0]
        assert bad.index == 2
        assert bad.original == {"genericName": "orphan"}
        assert bad.normalized.code == "DRUG-3"
        assert bad.normalized.generic_name == "orphan"

    def test_identical_results_for_every_shape(self):
        reports = [
            ingest_payload(ITEMS, now=NOW),
            ingest_payload({"drugs": ITEMS}, now=NOW),
            ingest_payload({"data": ITEMS}, now=NOW),
        ]
        first = reports[0]
        for other in reports[1:]:
            assert other.valid_records == first.valid_records
            assert (other.valid_count, other.invalid_count) == (first.valid_count, first.invalid_count)

    def test_missing_brand_and_company(self):
        report = ingest_payload([{"genericName": "x"}])
        assert report.valid_count == 0
        assert report.invalid_count == 1
        assert report.invalid_records[0].index == 0

    def test_default_launch_date_not_before_run_start(self, monkeypatch):
        import druglist.services.drug_ingestion_service as ingestion

        start = datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

        class _FrozenDatetime(datetime):
            @classmethod
            def now(cls, tz=None):
                return start

        monkeypatch.setattr(ingestion, "datetime", _FrozenDatetime)
        report = ingest_payload([{"genericName": "a", "brandName": "A", "company": "Co"}])
        stamped = report.valid_records[0].launch_date
        assert datetime.fromisoformat(stamped.replace("Z", "+00:00")) >= start

    def test_shared_default_launch_date(self):
        report = ingest_payload([
            {"genericName": "a", "brandName": "A", "company": "Co"},
            {"genericName": "b", "brandName": "B", "company": "Co"},
        ], now=NOW)
        assert {r.launch_date for r in report.valid_records} == {"2024-01-01T00:00:00.000Z"}

    def test_empty_array(self):
        report = ingest_payload({"data": []})
        assert (report.total_count, report.valid_count, report.invalid_count) == (0, 0, 0)

    def test_report_to_dict(self):
        result = ingest_payload({"drugs": ITEMS}, now=NOW).to_dict()
        assert result["shape"] == "drugs"
        assert result["validCount"] == 2
        assert result["invalidCount"] == 1
        diag = result["invalidDiagnostics"][0]
        assert diag["index"] == 2
        assert diag["normalized"]["genericName"] == "orphan"
        assert diag["missing"] == ["brandName", "company"]
        json.dumps(result)

    def test_logs_warning_for_invalid_record(self, caplog):
        with caplog.at_level("WARNING", logger="druglist.ingestion"):
            ingest_payload(ITEMS, now=NOW)
        assert any("Record 3 missing required fields" in r.getMessage() for r in caplog.records)

    def test_unrecognized_payload_raises(self):
        with pytest.raises(MalformedInputError):
            ingest_payload({"records": ITEMS})


class TestJsonSources:
    def test_parse_invalid_json(self):
        with pytest.raises(MalformedInputError):
            parse_json_text("{not json")

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(MalformedInputError):
            load_json_file(tmp_path / "absent.json")

    def test_ingest_file(self, tmp_path):
        path = tmp_path / "drugs.json"
        path.write_text(json.dumps({"drugs": ITEMS}), encoding="utf-8")
        report = ingest_file(path, now=NOW)
        assert report.valid_count == 2
