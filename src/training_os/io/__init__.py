"""Persistence and wire-format conversion."""
