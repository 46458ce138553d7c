"""Lint rules for graphpc-lint."""
