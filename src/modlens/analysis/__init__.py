"""
Analysis module for modlens.

Flat listings built on top of the archive catalog.
"""

from .listers import (
    AccessWidenerGroup, AccessWidenerListing, MixinGroup, MixinListing,
    list_access_wideners, list_mixins,
)

__all__ = [
    "AccessWidenerGroup",
    "AccessWidenerListing",
    "MixinGroup",
    "MixinListing",
    "list_access_wideners",
    "list_mixins",
]
