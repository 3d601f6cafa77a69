"""
Image upload endpoints.

- POST /upload/book-cover/{book_id}            (form field ``cover``)
- POST /upload/audiobook-cover/{audio_book_id} (form field ``cover``)
- POST /upload/product-image/{product_id}      (form field ``image``)

Each converts the file to WebP, stores it in the public directory and
points the entity's image field at it. A failed conversion leaves the
entity unchanged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Tuple

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from ..config import Settings
from ..dependencies import get_app_settings, get_storage
from ..models import UploadResult
from ..storage import MemStorage
from .images import (
    COVER_SIZE,
    PRODUCT_SIZE,
    ImageConversionError,
    UploadTooLargeError,
    convert_to_webp,
    staged_upload,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["uploads"])


async def _store_image(
    upload: Optional[UploadFile],
    settings: Settings,
    exists: Callable[[], bool],
    update: Callable[[str], object],
    filename: str,
    size: Tuple[int, int],
    not_found: str,
    failure: str,
) -> str:
    """Run the upload pipeline and return the public URL of the new image."""
    if upload is None or not upload.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if not (upload.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed")

    public_dir = Path(settings.PUBLIC_DIR)
    output = public_dir / filename
    try:
        async with staged_upload(upload, settings.UPLOAD_TEMP_DIR, settings.MAX_UPLOAD_BYTES) as staged:
            if not exists():
                raise HTTPException(status_code=404, detail=not_found)

            public_dir.mkdir(parents=True, exist_ok=True)
            await convert_to_webp(
                staged,
                output,
                size,
                quality=settings.IMAGE_QUALITY,
                binary=settings.IMAGEMAGICK_BINARY,
            )
    except UploadTooLargeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ImageConversionError as exc:
        logger.error("Upload of %s failed: %s", filename, exc)
        raise HTTPException(status_code=500, detail=failure) from exc

    url = f"{settings.PUBLIC_URL_PREFIX.rstrip('/')}/{filename}"
    if update(url) is None:
        # The entity went away while the image was being converted.
        output.unlink(missing_ok=True)
        raise HTTPException(status_code=404, detail=not_found)
    logger.info("Stored %s", url)
    return url


@router.post("/book-cover/{book_id}", response_model=UploadResult, response_model_exclude_none=True)
async def upload_book_cover(
    book_id: int,
    cover: Optional[UploadFile] = File(default=None),
    storage: MemStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> UploadResult:
    url = await _store_image(
        cover,
        settings,
        exists=lambda: storage.get_book(book_id) is not None,
        update=lambda u: storage.update_book(book_id, {"cover_image": u}),
        filename=f"book-{book_id}-cover.webp",
        size=COVER_SIZE,
        not_found="Book not found",
        failure="Failed to upload cover",
    )
    return UploadResult(message="Cover uploaded successfully", path=url, cover_image=url)


@router.post(
    "/audiobook-cover/{audio_book_id}", response_model=UploadResult, response_model_exclude_none=True
)
async def upload_audio_book_cover(
    audio_book_id: int,
    cover: Optional[UploadFile] = File(default=None),
    storage: MemStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> UploadResult:
    url = await _store_image(
        cover,
        settings,
        exists=lambda: storage.get_audio_book(audio_book_id) is not None,
        update=lambda u: storage.update_audio_book(audio_book_id, {"cover_image": u}),
        filename=f"audiobook-{audio_book_id}-cover.webp",
        size=COVER_SIZE,
        not_found="AudioBook not found",
        failure="Failed to upload cover",
    )
    return UploadResult(message="Cover uploaded successfully", path=url, cover_image=url)


@router.post(
    "/product-image/{product_id}", response_model=UploadResult, response_model_exclude_none=True
)
async def upload_product_image(
    product_id: int,
    image: Optional[UploadFile] = File(default=None),
    storage: MemStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> UploadResult:
    url = await _store_image(
        image,
        settings,
        exists=lambda: storage.get_shop_product(product_id) is not None,
        update=lambda u: storage.update_shop_product(product_id, {"image_url": u}),
        filename=f"product-{product_id}-image.webp",
        size=PRODUCT_SIZE,
        not_found="Product not found",
        failure="Failed to upload image",
    )
    return UploadResult(message="Image uploaded successfully", path=url, image_url=url)
