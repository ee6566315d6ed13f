"""Command line interface for rerost."""
