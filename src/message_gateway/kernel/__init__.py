"""Kernel – errors, identifiers, time and messaging ports (no I/O)."""
