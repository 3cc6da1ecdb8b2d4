"""
Record normalizer – maps one raw, schema-variable drug object onto the
canonical five-field record.

Field resolution is driven by FIELD_ALIASES: for each canonical field the
alias keys are tried in order and the first truthy value wins. When no alias
matches, the field default applies (synthesized code, ingestion timestamp,
or an empty string). Normalization never rejects a record; validity is a
separate check applied by the caller.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional


# Canonical field -> candidate raw keys, highest priority first.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "code": ("code", "drugCode", "id", "drug_id"),
    "genericName": ("genericName", "generic_name", "generic"),
    "brandName": ("brandName", "brand_name", "brand"),
    "company": ("company", "companyName", "manufacturer", "manufacturerName"),
    "launchDate": ("launchDate", "launch_date", "date"),
}

REQUIRED_FIELDS = ("genericName", "brandName", "company")

CODE_PREFIX = "DRUG-"


@dataclass(frozen=True)
class CanonicalDrugRecord:
    """A drug entry in the fixed five-field schema."""
    code: str
    generic_name: str
    brand_name: str
    company: str
    launch_date: str

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "genericName": self.generic_name,
            "brandName": self.brand_name,
            "company": self.company,
            "launchDate": self.launch_date,
        }

    def missing_fields(self) -> list[str]:
        values = self.to_dict()
        return [f for f in REQUIRED_FIELDS if not values[f]]


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """
    UTC ISO-8601 with millisecond precision and a trailing 'Z'.
    Sub-millisecond remainders round up, so the result is never earlier
    than *moment*.
    """
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    remainder = moment.microsecond % 1000
    if remainder:
        moment += timedelta(microseconds=1000 - remainder)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def first_present(raw: Mapping[str, Any], aliases) -> Optional[Any]:
    """
    Return the value of the first alias holding a truthy scalar, else None.
    Nested objects and lists cannot fill a text column and count as absent.
    """
    for key in aliases:
        value = raw.get(key)
        if value and not isinstance(value, (Mapping, list, tuple)):
            return value
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return str(value)


def _resolve(raw: Mapping[str, Any], field_name: str, default: str) -> str:
    value = first_present(raw, FIELD_ALIASES[field_name])
    if value is None:
        return default
    return _as_text(value)


def normalize_record(raw: Any, index: int, now: Optional[datetime] = None) -> CanonicalDrugRecord:
    """
    Map a raw drug object at batch position *index* (zero-based) to a
    CanonicalDrugRecord.

    Anything that is not a mapping is treated as an empty object, so it
    normalizes to a record with only the synthesized defaults.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    return CanonicalDrugRecord(
        code=_resolve(raw, "code", f"{CODE_PREFIX}{index + 1}"),
        generic_name=_resolve(raw, "genericName", ""),
        brand_name=_resolve(raw, "brandName", ""),
        company=_resolve(raw, "company", ""),
        launch_date=_resolve(raw, "launchDate", iso_timestamp(now)),
    )


def is_valid(record: CanonicalDrugRecord) -> bool:
    """A record is valid iff generic name, brand name and company are all non-empty."""
    return bool(record.generic_name and record.brand_name and record.company)
