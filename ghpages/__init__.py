"""Publish a prebuilt static site directory to a pages branch."""

__version__ = "0.1.0"
