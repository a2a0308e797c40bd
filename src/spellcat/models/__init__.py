"""Database models and practice data structures."""
