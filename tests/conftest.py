"""
Test-wide setup.

Points the application at an in-memory SQLite database before any
``app`` module creates its engine.
"""

import os

os.environ.setdefault("DATABASE_URI", "sqlite://")
