"""Command-line interface for PERSISTKIT."""
