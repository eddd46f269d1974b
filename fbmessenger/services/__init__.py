"""Encoding, dispatch and HTTP client services."""
