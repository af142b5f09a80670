"""Storage, type-name parsing and native-format encoding for ClickHouse column types."""

__version__ = "0.1.0"