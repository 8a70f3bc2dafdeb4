"""Load dotted-header CSV files into a relational users table."""
from __future__ import annotations

__version__ = "1.0.0"
