"""Spelling, mastery, word, session and progress services."""
