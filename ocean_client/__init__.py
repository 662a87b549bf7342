"""Immutable request builders and an HTTP client for the DigitalOcean v2 API."""

__version__ = "0.1.0"