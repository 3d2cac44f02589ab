"""Index construction and measurement benchmark over TPC-DS tables."""

__version__ = "0.1.0"
