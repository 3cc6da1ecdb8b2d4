"""
Pytest configuration & fixtures for the drug listing backend tests.

Key design decisions:
  - Uses sqlite:///:memory: for speed and isolation.
  - Rate limiting is disabled so ingestion tests can post freely.
  - The drugs table is re-seeded through DrugStore.replace_all before
    every test that uses the client or store, so tests may mutate it.
"""

import os
import sys

import pytest

# ── 1. Ensure backend package is importable ──
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# ── 2. Set test environment BEFORE anything else ──
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["FLASK_SECRET_KEY"] = "test-secret-key"
os.environ["APP_ENV"] = "testing"

# ── 3. NOW safe to import application modules ──
from druglist.main import create_app
from druglist.database import db as _db
from druglist.services.drug_normalizer import CanonicalDrugRecord


# ═══════════════════════════════════════════
# SEED DATA
# ═══════════════════════════════════════════

SEED_DRUGS = [
    CanonicalDrugRecord("0006-0568", "vorinostat", "ZOLINZA", "Merck Sharp & Dohme Corp.", "2004-02-14T23:01:10Z"),
    CanonicalDrugRecord("0006-1234", "imatinib", "GLEEVEC", "Novartis Pharmaceuticals Corporation", "2001-05-10T00:00:00Z"),
    CanonicalDrugRecord("0006-5678", "trastuzumab", "HERCEPTIN", "Genentech, Inc.", "1998-09-25T00:00:00Z"),
    CanonicalDrugRecord("0078-0401", "nilotinib", "TASIGNA", "Novartis Pharmaceuticals Corporation", "2007-10-29T00:00:00Z"),
    CanonicalDrugRecord("50242-060", "bevacizumab", "AVASTIN", "Genentech, Inc.", "2004-02-26T00:00:00Z"),
]


# ═══════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════

@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    application = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "RATELIMIT_ENABLED": False,
    })
    yield application
    with application.app_context():
        _db.drop_all()


@pytest.fixture
def store(app):
    """DrugStore seeded with SEED_DRUGS inside an app context."""
    with app.app_context():
        drug_store = app.extensions["drug_store"]
        drug_store.replace_all(SEED_DRUGS)
        yield drug_store


@pytest.fixture
def client(app, store):
    """Flask test client with a freshly seeded database."""
    with app.test_client() as c:
        yield c
