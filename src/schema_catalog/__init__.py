"""Schema Catalog Tools — filtered reads of the PostgreSQL schema catalog.

The library composes a filtered ``information_schema.schemata`` query from a
SchemaFilterConfig, runs it inside a rolled-back transaction and returns the
matching schema names together with a stable configuration identifier.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
