"""
actorsync: client-side identity state kept in sync with a remote identity service.
"""

__version__ = "0.1.0"
