"""Keeo CLI - client library and command line for the Keeo membership API."""

__version__ = "0.1.0"
