"""User management backend package wiring.

The ASGI application lives in :mod:`user_management_backend.main`; it is not
imported here so that importing the package never builds a database engine.
"""

from user_management_backend.settings import BackendSettings, get_settings

__all__ = ["BackendSettings", "get_settings"]
