"""SCPI message tokenizing, header pattern matching and number conversions."""

__version__ = "0.1.0"

__all__ = ["convert", "lexer", "matching", "message"]