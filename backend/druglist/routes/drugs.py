"""
Drug listing routes – paginated listing, company filter values and the
table descriptor the frontend renders from.
"""

from flask import Blueprint, request, jsonify

from druglist.config import Config
from druglist.services.drug_query_service import query_drugs, list_companies
from druglist.services.drug_store import current_store

drugs_bp = Blueprint("drugs", __name__)

TABLE_COLUMNS = [
    {"id": "id", "label": "Id", "sortable": False, "width": 80},
    {"id": "code", "label": "Code", "sortable": True, "width": 120},
    {"id": "name", "label": "Name", "sortable": True, "width": 250},
    {"id": "company", "label": "Company", "sortable": True, "width": 200},
    {"id": "launchDate", "label": "Launch Date", "sortable": True, "width": 150},
]


@drugs_bp.route("/drugs", methods=["GET"])
def list_drugs():
    """
    One page of drugs, newest launch first.

    Query parameters:
        company – exact company name to filter on (optional)
        page    – 1-based page number, default 1
        limit   – page size, default 50, clamped to 1..100
    """
    result = query_drugs(
        current_store(),
        company=request.args.get("company"),
        page=request.args.get("page"),
        limit=request.args.get("limit"),
    )
    return jsonify(result), 200


@drugs_bp.route("/companies", methods=["GET"])
def get_companies():
    """Distinct company names in ascending order."""
    return jsonify(list_companies(current_store())), 200


@drugs_bp.route("/table-config", methods=["GET"])
def table_config():
    return jsonify({
        "columns": TABLE_COLUMNS,
        "settings": {
            "pageSize": Config.TABLE_PAGE_SIZE,
            "maxPageSize": Config.MAX_PAGE_SIZE,
            "sortBy": "launchDate",
            "sortOrder": "desc",
            "pagination": True,
        },
    }), 200
