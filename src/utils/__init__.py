"""Shared helpers: logging, errors, config, time."""
