"""
Drug listing backend – Flask Application Factory
Serves the REST API consumed by the drug table frontend.
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from druglist.config import Config
from druglist.database import db
from druglist.errors import MalformedInputError, StorageUnavailableError
from druglist.rate_limit import limiter
from druglist.routes.drugs import drugs_bp
from druglist.routes.ingestion import ingestion_bp
from druglist.services.drug_normalizer import iso_timestamp
from druglist.services.drug_store import DrugStore

logger = logging.getLogger("druglist.app")


def create_app(config_overrides: dict = None) -> Flask:
    Config.validate()

    app = Flask(__name__)
    app.config["SECRET_KEY"] = Config.FLASK_SECRET_KEY
    app.config["SQLALCHEMY_DATABASE_URI"] = Config.DATABASE_URL
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["DEBUG"] = Config.DEBUG
    if config_overrides:
        app.config.update(config_overrides)

    # Extensions
    CORS(app, resources={r"/api/*": {"origins": "*"}})
    limiter.init_app(app)
    db.init_app(app)

    # Create tables if they don't already exist
    with app.app_context():
        from druglist.models import models as _models  # noqa: F401 – ensure all models are registered
        db.create_all()

    app.extensions["drug_store"] = DrugStore(db.session)

    # Blueprints
    app.register_blueprint(drugs_bp, url_prefix="/api")
    app.register_blueprint(ingestion_bp, url_prefix="/api/ingestion")

    # Errors
    @app.errorhandler(MalformedInputError)
    def malformed_input(exc):
        return jsonify(exc.to_dict()), 400

    @app.errorhandler(StorageUnavailableError)
    def storage_unavailable(exc):
        return jsonify(exc.to_dict()), 500

    # Health check
    @app.route("/api/health")
    def health():
        store = app.extensions["drug_store"]
        try:
            store.ping()
        except StorageUnavailableError as exc:
            logger.warning("Health check failed: %s", exc)
            return jsonify({"status": "DEGRADED", "timestamp": iso_timestamp(), "database": "unavailable"}), 503
        return jsonify({"status": "OK", "timestamp": iso_timestamp(), "database": "ok"}), 200

    return app
