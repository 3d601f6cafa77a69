# rizyland/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .catalog import catalog_router
from .config import Settings, get_settings
from .library import library_router
from .logging_config import setup_logging
from .seed import seed_storage
from .shop import shop_router
from .storage import MemStorage
from .uploads import uploads_router

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid data", "errors": jsonable_encoder(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Optional[Settings] = None, storage: Optional[MemStorage] = None) -> FastAPI:
    """Build the API around ``storage``.

    Serve it with ``uvicorn --factory rizyland.main:create_app``.

    Without an explicit store a new one is created and, when
    ``SEED_DATA`` is on, filled with the fixture catalogue.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    if storage is None:
        storage = MemStorage()
        if settings.SEED_DATA:
            seed_storage(storage)

    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Books, audio books, personal libraries, purchases and the merch "
            "shop behind the RIZY LAND children's reading app."
        ),
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/")
    def health_check():
        return {"status": "ok", "message": "RIZY LAND API live"}

    for router in (catalog_router, library_router, shop_router, uploads_router):
        app.include_router(router, prefix=settings.API_PREFIX)

    return app

