"""Offline GCAT ingestion for the launch-market dashboard."""

__version__ = "0.1.0"
