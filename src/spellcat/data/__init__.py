"""Bundled curriculum data."""
