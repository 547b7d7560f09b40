"""Adapters – broker, database and HTTP implementations of the kernel ports."""
