"""FastAPI dependencies giving routes access to the shared store and settings."""

from fastapi import Request

from .config import Settings
from .storage import MemStorage


def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
