"""Logging setup and data issue log."""
