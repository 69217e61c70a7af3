"""Command-line interface for searchbar."""
