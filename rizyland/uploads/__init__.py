"""Cover and product image uploads."""

from .router import router as uploads_router  # noqa: F401
