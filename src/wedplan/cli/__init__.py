"""Command line interface for wedplan."""
