"""
Catalog package for the preset marketplace.

Exposes the search endpoint and the read/delete endpoints for presets
and preset packs. Search filters are assembled in ``filters`` and run
against the relational store through ``store``.
"""

from .router import router as catalog_router  # noqa: F401
