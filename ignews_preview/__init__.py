"""ig.news paid-post preview service."""

__version__ = "0.1.0"
