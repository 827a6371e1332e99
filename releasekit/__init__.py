"""Typed client for the releases endpoints of the GitHub REST API."""

__version__ = "0.1.0"
