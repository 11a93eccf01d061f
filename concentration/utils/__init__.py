"""Logging setup and terminal rendering."""
