"""
Lookup API Layer.

This package handles all communication with the external lookup service that
resolves Spotify track links into download links.
"""

from .client import LookupClient, LookupOutcome
from .messages import describe_error

__all__ = ["LookupClient", "LookupOutcome", "describe_error"]
