"""Embedded tree database storing named nodes and their values in a single file."""

__version__ = "0.1.0"
__all__ = ["database", "errors", "keys", "nodes", "records", "transaction"]