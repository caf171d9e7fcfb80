"""Command line interface for reader-api."""
