"""Logging and template helpers for pyxgettext."""
