"""Find-style file matchers, a glob engine, and a parser for find expressions."""

__version__ = "0.1.0"