"""
Route definitions for the catalogue API.

Endpoints (mounted under the configured API prefix, ``/api`` by default):
- GET    /categories               : list categories
- GET    /categories/{id}          : one category
- GET    /books                    : list books not in the trash
- GET    /books/search?q=          : search books
- GET    /books/{id}               : one book (trashed books included)
- POST   /books                    : create a book
- PUT    /books/{id}               : partial update
- DELETE /books/{id}               : move a book to the trash
- GET    /trash/books              : list trashed books
- POST   /books/{id}/restore       : take a book out of the trash
- same list/search/get/create/update/delete set under /audio-books,
  where delete removes the audio book for good
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..dependencies import get_storage
from ..models import (
    AudioBook,
    AudioBookUpdate,
    Book,
    BookUpdate,
    Category,
    InsertAudioBook,
    InsertBook,
    MessageResponse,
)
from ..storage import MemStorage

router = APIRouter(tags=["catalog"])


# ---------------------------------------------------------------------------
# Categories


@router.get("/categories", response_model=List[Category])
def list_categories(storage: MemStorage = Depends(get_storage)) -> List[Category]:
    return storage.get_categories()


@router.get("/categories/{category_id}", response_model=Category)
def get_category(category_id: int, storage: MemStorage = Depends(get_storage)) -> Category:
    category = storage.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


# ---------------------------------------------------------------------------
# Books


@router.get("/trash/books", response_model=List[Book])
def list_deleted_books(storage: MemStorage = Depends(get_storage)) -> List[Book]:
    return storage.get_deleted_books()


@router.get("/books", response_model=List[Book])
def list_books(
    category_id: Optional[int] = Query(default=None, alias="categoryId"),
    is_premium: Optional[bool] = Query(default=None, alias="isPremium"),
    storage: MemStorage = Depends(get_storage),
) -> List[Book]:
    return storage.get_books(category_id=category_id, is_premium=is_premium)


@router.get("/books/search", response_model=List[Book])
def search_books(
    q: Optional[str] = Query(default=None, description="Text searched in title, author and description"),
    storage: MemStorage = Depends(get_storage),
) -> List[Book]:
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")
    return storage.search_books(q)


@router.get("/books/{book_id}", response_model=Book)
def get_book(book_id: int, storage: MemStorage = Depends(get_storage)) -> Book:
    book = storage.get_book(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.post("/books", response_model=Book)
def create_book(payload: InsertBook, storage: MemStorage = Depends(get_storage)) -> Book:
    return storage.create_book(payload)


@router.put("/books/{book_id}", response_model=Book)
def update_book(
    book_id: int, payload: BookUpdate, storage: MemStorage = Depends(get_storage)
) -> Book:
    book = storage.update_book(book_id, payload)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.delete("/books/{book_id}", response_model=MessageResponse)
def delete_book(book_id: int, storage: MemStorage = Depends(get_storage)) -> MessageResponse:
    if not storage.delete_book(book_id):
        raise HTTPException(status_code=404, detail="Book not found")
    return MessageResponse(message="Book deleted successfully")


@router.post("/books/{book_id}/restore", response_model=MessageResponse)
def restore_book(book_id: int, storage: MemStorage = Depends(get_storage)) -> MessageResponse:
    if not storage.restore_book(book_id):
        raise HTTPException(status_code=404, detail="Book not found in trash")
    return MessageResponse(message="Book restored successfully")


# ---------------------------------------------------------------------------
# Audio books


@router.get("/audio-books", response_model=List[AudioBook])
def list_audio_books(
    category_id: Optional[int] = Query(default=None, alias="categoryId"),
    is_premium: Optional[bool] = Query(default=None, alias="isPremium"),
    storage: MemStorage = Depends(get_storage),
) -> List[AudioBook]:
    return storage.get_audio_books(category_id=category_id, is_premium=is_premium)


@router.get("/audio-books/search", response_model=List[AudioBook])
def search_audio_books(
    q: Optional[str] = Query(default=None),
    storage: MemStorage = Depends(get_storage),
) -> List[AudioBook]:
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")
    return storage.search_audio_books(q)


@router.get("/audio-books/{audio_book_id}", response_model=AudioBook)
def get_audio_book(audio_book_id: int, storage: MemStorage = Depends(get_storage)) -> AudioBook:
    audio_book = storage.get_audio_book(audio_book_id)
    if audio_book is None:
        raise HTTPException(status_code=404, detail="Audio book not found")
    return audio_book


@router.post("/audio-books", response_model=AudioBook)
def create_audio_book(
    payload: InsertAudioBook, storage: MemStorage = Depends(get_storage)
) -> AudioBook:
    return storage.create_audio_book(payload)


@router.put("/audio-books/{audio_book_id}", response_model=AudioBook)
def update_audio_book(
    audio_book_id: int, payload: AudioBookUpdate, storage: MemStorage = Depends(get_storage)
) -> AudioBook:
    audio_book = storage.update_audio_book(audio_book_id, payload)
    if audio_book is None:
        raise HTTPException(status_code=404, detail="Audio book not found")
    return audio_book


@router.delete("/audio-books/{audio_book_id}", response_model=MessageResponse)
def delete_audio_book(
    audio_book_id: int, storage: MemStorage = Depends(get_storage)
) -> MessageResponse:
    if not storage.delete_audio_book(audio_book_id):
        raise HTTPException(status_code=404, detail="Audio book not found")
    return MessageResponse(message="Audio book deleted successfully")
