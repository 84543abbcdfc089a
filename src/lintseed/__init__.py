"""Lintseed - infer a linter rule configuration from sample code."""

__version__ = "0.1.0"
