"""Core models, errors and filesystem helpers."""
