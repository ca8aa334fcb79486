# stainframe/utils/__init__.py
"""Shared utilities."""
