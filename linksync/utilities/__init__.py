"""Shared helpers: constants, logging, time and fuzzy scoring."""
