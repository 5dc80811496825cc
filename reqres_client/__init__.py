"""
Typed, caching async client for the ReqRes user-listing API.
"""

__version__ = "0.1.0"
