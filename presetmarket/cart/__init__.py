"""
Cart and wishlist endpoints.

The cart and the wishlist are two collections of the same entry shape,
distinguished by ``CartType``.
"""

from .router import router as cart_router  # noqa: F401
