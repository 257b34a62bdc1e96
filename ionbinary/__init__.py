"""Decimals, integer encodings, buffered containers and a raw item reader for binary Ion."""

__version__ = "0.1.0"

__all__ = ["bitcodes", "bits", "bitstream", "buf", "context", "decimals", "errors"]