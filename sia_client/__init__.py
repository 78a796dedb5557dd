"""
Typed client for the Sia walletd HTTP API.

Requests are plain values that describe their endpoint; a single dispatcher
turns them into authenticated HTTP calls and decodes the replies. See
DESIGN.md for full details.
"""

__version__ = "0.1.0"

__all__ = ["config", "types", "sia_api"]
