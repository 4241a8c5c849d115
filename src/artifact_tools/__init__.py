"""Build-side helpers for resource attribute tables and dependency filtering."""

__version__ = "0.3.1"
