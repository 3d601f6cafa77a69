"""User library and purchase endpoints."""

from .router import router as library_router  # noqa: F401
