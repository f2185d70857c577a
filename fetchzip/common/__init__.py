"""Shared constants, configuration, errors and logging for fetchzip."""
