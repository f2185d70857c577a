"""Fetch, extract and find operations."""
