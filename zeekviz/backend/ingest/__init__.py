"""
ingest/__init__.py

Public API for the ingest sub-package.
"""

from .filter import FilterCriteria, apply_filters
from .parser import is_local_ip, load_file, load_records, parse_line

__all__ = [
    "FilterCriteria",
    "apply_filters",
    "is_local_ip",
    "load_file",
    "load_records",
    "parse_line",
]
