"""Shared library utilities."""
