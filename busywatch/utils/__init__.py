"""Utility functions package for busywatch.

Exposed functions:
    name_of: Derives a registry name from an object's runtime type.
    resolve_name: Accepts either a name or an object and returns the name.
"""

from .naming import name_of, resolve_name

__all__ = ["name_of", "resolve_name"]
