"""minikanban - Terminal task board with query filters, audit log and integrity checks."""

__version__ = "0.1.0"
