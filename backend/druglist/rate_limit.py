"""Shared Flask-Limiter instance; bound to the app in create_app()."""

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from druglist.config import Config

limiter = Limiter(key_func=get_remote_address, default_limits=[Config.RATE_LIMIT_DEFAULT])
