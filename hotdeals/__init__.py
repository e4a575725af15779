"""Hot deals marketplace data service."""

__version__ = "0.1.0"
