"""File-backed tables with a SQL-like shell, a TCP client, and thread synchronisation programs."""

__version__ = "0.1.0"

__all__ = [
    "client",
    "conditions",
    "linkedlist",
    "locking",
    "operations",
    "parser",
    "philosophers",
    "primitives",
    "schema",
    "select",
    "students",
]