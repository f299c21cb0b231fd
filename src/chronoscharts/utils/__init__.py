"""Shared helpers: logging setup and display formatting."""
