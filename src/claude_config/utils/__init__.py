"""Shared helpers: console output, paths and errors."""
