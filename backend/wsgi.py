"""
Entry point for the drug listing backend.
Run with: python wsgi.py
"""

import logging

from druglist.config import Config
from druglist.main import create_app

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app()

if __name__ == "__main__":
    app.run(host=Config.HOST, port=Config.PORT, debug=app.config.get("DEBUG", False))
