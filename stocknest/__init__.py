"""One-dimensional cutting-stock optimization: length parsing, pattern grouping, an integer-programming optimizer and a Flask HTTP API."""

__version__ = "1.0.0"

__all__ = ["models", "parse", "output", "algorithm", "server"]