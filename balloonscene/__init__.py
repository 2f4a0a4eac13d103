"""Balloon flight and wildfire scene aggregation service."""

__version__ = "0.1.0"
