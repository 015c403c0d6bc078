"""OAuth 2.0 credential and token persistence core."""

__version__ = "0.1.0"
