"""
Admin route for loading drug data.
The request body is a raw JSON payload in any of the supported shapes;
valid records replace the whole drugs table unless dry_run is set.
"""

import logging
from flask import Blueprint, jsonify, request

from druglist.config import Config
from druglist.rate_limit import limiter
from druglist.services.drug_ingestion_service import ingest_payload, parse_json_text
from druglist.services.drug_store import current_store

logger = logging.getLogger("druglist.routes.ingestion")

ingestion_bp = Blueprint("ingestion", __name__)

_TRUTHY = ("1", "true", "yes", "on")


@ingestion_bp.route("/", methods=["POST"])
@limiter.limit(Config.RATE_LIMIT_INGESTION)
def ingest_drugs():
    """
    Ingest a drug payload.
    Body: [...] | {"drugs": [...]} | {"data": [...]}
    Query: ?dry_run=true to report without touching the table.
    """
    payload = parse_json_text(request.get_data(as_text=True))
    report = ingest_payload(payload)

    dry_run = request.args.get("dry_run", "").strip().lower() in _TRUTHY
    persisted = 0
    if not dry_run:
        persisted = current_store().replace_all(report.valid_records)
        logger.info("Ingestion via API persisted %d drugs", persisted)

    result = report.to_dict()
    result["persisted"] = persisted
    result["dryRun"] = dry_run
    return jsonify(result), 200
