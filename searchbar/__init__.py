"""searchbar - incremental search and replace for text editors."""

__version__ = "0.1.0"
