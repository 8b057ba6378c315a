"""Shared helpers used across the versioning package and the CLI."""
