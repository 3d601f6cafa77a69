"""
Per-user library and purchase routes.

Library entries and purchases point at exactly one book or audio book;
payloads carrying both ids or neither are rejected with 400 before the
store is touched. The referenced user and content ids are not checked
for existence.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..dependencies import get_storage
from ..models import (
    InsertPurchase,
    InsertUserLibrary,
    MessageResponse,
    ProgressUpdate,
    Purchase,
    PurchaseCheck,
    UserLibraryEntry,
)
from ..storage import MemStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["library"])


@router.get("/library/{user_id}", response_model=List[UserLibraryEntry])
def get_user_library(user_id: int, storage: MemStorage = Depends(get_storage)) -> List[UserLibraryEntry]:
    return storage.get_user_library(user_id)


@router.post("/library", response_model=UserLibraryEntry, status_code=201)
def add_to_library(
    payload: InsertUserLibrary, storage: MemStorage = Depends(get_storage)
) -> UserLibraryEntry:
    return storage.add_to_library(payload)


@router.patch("/library/progress", response_model=MessageResponse)
def update_progress(
    payload: ProgressUpdate, storage: MemStorage = Depends(get_storage)
) -> MessageResponse:
    updated = storage.update_progress(
        payload.user_id,
        book_id=payload.book_id,
        audio_book_id=payload.audio_book_id,
        progress=payload.progress,
    )
    if not updated:
        logger.info("Progress for user %s dropped: item not in library", payload.user_id)
    return MessageResponse(message="Progress updated successfully")


# ---------------------------------------------------------------------------
# Purchases


@router.get("/purchases/{user_id}", response_model=List[Purchase])
def get_user_purchases(user_id: int, storage: MemStorage = Depends(get_storage)) -> List[Purchase]:
    return storage.get_user_purchases(user_id)


@router.post("/purchases", response_model=Purchase, status_code=201)
def create_purchase(payload: InsertPurchase, storage: MemStorage = Depends(get_storage)) -> Purchase:
    return storage.create_purchase(payload)


@router.get("/purchases/{user_id}/check", response_model=PurchaseCheck)
def check_purchase(
    user_id: int,
    book_id: Optional[int] = Query(default=None, alias="bookId"),
    audio_book_id: Optional[int] = Query(default=None, alias="audioBookId"),
    storage: MemStorage = Depends(get_storage),
) -> PurchaseCheck:
    if (book_id is None) == (audio_book_id is None):
        raise HTTPException(status_code=400, detail="Either bookId or audioBookId is required")
    return PurchaseCheck(
        has_purchased=storage.has_purchased(user_id, book_id=book_id, audio_book_id=audio_book_id)
    )
