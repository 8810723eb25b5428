"""Command line interface for ghostmd."""
