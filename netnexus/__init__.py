"""CLI view hierarchies, command expressions and configuration templates loaded from module XML files."""

__version__ = "1.0.0"