"""Build installable per-language translation packages."""

__version__ = "0.1.0"
