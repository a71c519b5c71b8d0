"""Logging for tagcheck."""
