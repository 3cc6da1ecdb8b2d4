"""
Drug listing backend – Configuration Loader
Loads settings from .env via environment variables.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

_backend_dir = Path(__file__).resolve().parent.parent

# Load .env from project root
_env_path = _backend_dir.parent / ".env"
load_dotenv(dotenv_path=_env_path)


class Config:
    """Base configuration – values sourced from environment with local defaults."""

    # --- Storage ---
    DATABASE_URL: str = os.environ.get("DATABASE_URL", f"sqlite:///{_backend_dir / 'drugs.db'}")
    DRUG_DATA_PATH: str = os.environ.get("DRUG_DATA_PATH", str(_backend_dir / "drugData.json"))

    # --- Secrets ---
    FLASK_SECRET_KEY: str = os.environ.get("FLASK_SECRET_KEY", "")

    # --- App ---
    APP_ENV: str = os.environ.get("APP_ENV", "development")
    DEBUG: bool = APP_ENV == "development"
    HOST: str = os.environ.get("HOST", "127.0.0.1")
    PORT: int = int(os.environ.get("PORT", "5000"))

    # --- Rate limiting ---
    RATE_LIMIT_DEFAULT: str = "120/minute"
    RATE_LIMIT_INGESTION: str = "10/minute"

    # --- Pagination ---
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 100
    TABLE_PAGE_SIZE: int = 10

    # --- Validation ---
    @classmethod
    def validate(cls) -> None:
        """Raise on missing critical environment variables."""
        required = ["DATABASE_URL"]
        if cls.APP_ENV not in ("development", "testing"):
            required.append("FLASK_SECRET_KEY")
        missing = [k for k in required if not getattr(cls, k)]
        if missing:
            raise EnvironmentError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Ensure a .env file exists with all required values."
            )
