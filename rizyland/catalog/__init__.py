"""
Catalog package: categories, books (with trash/restore) and audio books.
"""

from .router import router as catalog_router  # noqa: F401
