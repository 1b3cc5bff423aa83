"""Registry, fetcher and API facade for curated Markdown skills."""

__version__ = "0.1.0"
