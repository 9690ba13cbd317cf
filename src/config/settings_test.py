"""Settings for the pytest run.

Provides the values ``settings.py`` refuses to default (``SECRET_KEY``) and
pins an in-memory SQLite database so the suite needs no running server.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")

from config.settings import *  # noqa: E402,F401,F403

DEBUG = False
