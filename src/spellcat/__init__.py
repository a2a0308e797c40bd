"""Spelling practice backend: word lists, scoring, review scheduling and a JSON API."""

__version__ = "0.1.0"
