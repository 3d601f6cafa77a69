# rizyland/storage.py
"""
In-memory repository for every entity the API serves.

``MemStorage`` keeps one ``dict`` per entity type keyed by integer id,
plus one id counter per type. Ids start at 1, are handed out in creation
order and are never reused, even after a hard delete. Nothing is
persisted: a fresh instance is empty until ``seed.seed_storage()`` (or
the caller) populates it.

Missing ids are never an error here. Lookups return ``None``, deletes
and restores return ``False``; turning that into an HTTP status is the
routers' job. Updates are validated against the entity model: a merge
that would break it raises ``pydantic.ValidationError`` and the stored
record is left as it was.

Delete semantics differ per type:

* books are soft-deleted (``is_deleted``) and can be restored,
* audio books are removed from the store,
* shop products are deactivated (``is_active``) with no restore path.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from .models import (
    AudioBook,
    AudioBookUpdate,
    Book,
    BookUpdate,
    Category,
    InsertAudioBook,
    InsertBook,
    InsertCategory,
    InsertPurchase,
    InsertShopProduct,
    InsertUser,
    InsertUserLibrary,
    Purchase,
    ShopProduct,
    ShopProductUpdate,
    User,
    UserLibraryEntry,
)


logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
Changes = Union[BaseModel, Mapping[str, Any]]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _changes(data: Changes) -> Dict[str, Any]:
    """Return only the fields the caller actually provided.

    Plain mappings must use the Python field names (``cover_image``).
    """
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True)
    return dict(data)


def _matches(text: Optional[str], needle: str) -> bool:
    return bool(text) and needle in text.lower()


def _content_matches(item: Any, book_id: Optional[int], audio_book_id: Optional[int]) -> bool:
    if book_id is not None:
        return item.book_id == book_id
    return item.audio_book_id == audio_book_id


def _check_reference(book_id: Optional[int], audio_book_id: Optional[int]) -> None:
    if (book_id is None) == (audio_book_id is None):
        raise ValueError("Exactly one of book_id or audio_book_id must be given")


class MemStorage:
    """Process-lifetime store for users, catalogue, library, purchases and shop."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.users: Dict[int, User] = {}
        self.categories: Dict[int, Category] = {}
        self.books: Dict[int, Book] = {}
        self.audio_books: Dict[int, AudioBook] = {}
        self.user_library: Dict[int, UserLibraryEntry] = {}
        self.purchases: Dict[int, Purchase] = {}
        self.shop_products: Dict[int, ShopProduct] = {}
        self._next_ids: Dict[str, int] = {
            "users": 1,
            "categories": 1,
            "books": 1,
            "audio_books": 1,
            "user_library": 1,
            "purchases": 1,
            "shop_products": 1,
        }

    # ------------------------------------------------------------------
    # Helpers

    def _insert(self, collection: str, model: Type[M], **fields: Any) -> M:
        with self._lock:
            new_id = self._next_ids[collection]
            self._next_ids[collection] = new_id + 1
            item = model(id=new_id, **fields)
            getattr(self, collection)[new_id] = item
        logger.debug("Created %s id=%s", collection, new_id)
        return item

    def _update(self, collection: str, item_id: int, data: Changes) -> Optional[Any]:
        with self._lock:
            items = getattr(self, collection)
            existing = items.get(item_id)
            if existing is None:
                return None
            # The merged record must still satisfy the entity model.
            updated = type(existing).model_validate({**existing.model_dump(), **_changes(data)})
            items[item_id] = updated
        return updated

    def _set_flag(self, collection: str, item_id: int, flag: str, value: bool) -> bool:
        with self._lock:
            items = getattr(self, collection)
            existing = items.get(item_id)
            if existing is None:
                return False
            items[item_id] = existing.model_copy(update={flag: value})
        return True

    # ------------------------------------------------------------------
    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(self, data: InsertUser) -> User:
        return self._insert("users", User, username=data.username)

    # ------------------------------------------------------------------
    # Categories

    def get_categories(self) -> List[Category]:
        return list(self.categories.values())

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.categories.get(category_id)

    def create_category(self, data: InsertCategory) -> Category:
        return self._insert(
            "categories",
            Category,
            name=data.name,
            description=data.description or None,
            icon=data.icon,
        )

    # ------------------------------------------------------------------
    # Books

    def get_books(
        self, category_id: Optional[int] = None, is_premium: Optional[bool] = None
    ) -> List[Book]:
        books = [b for b in self.books.values() if not b.is_deleted]
        if category_id is not None:
            books = [b for b in books if b.category_id == category_id]
        if is_premium is not None:
            books = [b for b in books if b.is_premium == is_premium]
        return books

    def get_book(self, book_id: int) -> Optional[Book]:
        return self.books.get(book_id)

    def create_book(self, data: InsertBook) -> Book:
        book = self._insert("books", Book, created_at=_now(), **data.model_dump())
        logger.info("Book %s created: %s", book.id, book.title)
        return book

    def update_book(self, book_id: int, data: Union[BookUpdate, Changes]) -> Optional[Book]:
        return self._update("books", book_id, data)

    def delete_book(self, book_id: int) -> bool:
        """Move a book to the trash. Deleting a trashed book again still succeeds."""
        if not self._set_flag("books", book_id, "is_deleted", True):
            return False
        logger.info("Book %s moved to trash", book_id)
        return True

    def get_deleted_books(self) -> List[Book]:
        return [b for b in self.books.values() if b.is_deleted]

    def restore_book(self, book_id: int) -> bool:
        with self._lock:
            book = self.books.get(book_id)
            if book is None or not book.is_deleted:
                return False
            self.books[book_id] = book.model_copy(update={"is_deleted": False})
        logger.info("Book %s restored from trash", book_id)
        return True

    def search_books(self, query: str) -> List[Book]:
        """Case-insensitive substring search over title, author and description.

        Trashed books are not returned. Matches keep store order.
        """
        needle = query.lower()
        return [
            b
            for b in self.books.values()
            if not b.is_deleted
            and (_matches(b.title, needle) or _matches(b.author, needle) or _matches(b.description, needle))
        ]

    # ------------------------------------------------------------------
    # Audio books

    def get_audio_books(
        self, category_id: Optional[int] = None, is_premium: Optional[bool] = None
    ) -> List[AudioBook]:
        audio_books = list(self.audio_books.values())
        if category_id is not None:
            audio_books = [a for a in audio_books if a.category_id == category_id]
        if is_premium is not None:
            audio_books = [a for a in audio_books if a.is_premium == is_premium]
        return audio_books

    def get_audio_book(self, audio_book_id: int) -> Optional[AudioBook]:
        return self.audio_books.get(audio_book_id)

    def create_audio_book(self, data: InsertAudioBook) -> AudioBook:
        audio_book = self._insert("audio_books", AudioBook, created_at=_now(), **data.model_dump())
        logger.info("Audio book %s created: %s", audio_book.id, audio_book.title)
        return audio_book

    def update_audio_book(
        self, audio_book_id: int, data: Union[AudioBookUpdate, Changes]
    ) -> Optional[AudioBook]:
        return self._update("audio_books", audio_book_id, data)

    def delete_audio_book(self, audio_book_id: int) -> bool:
        """Remove an audio book for good. There is no trash for audio books."""
        with self._lock:
            removed = self.audio_books.pop(audio_book_id, None)
        if removed is None:
            return False
        logger.info("Audio book %s deleted", audio_book_id)
        return True

    def search_audio_books(self, query: str) -> List[AudioBook]:
        needle = query.lower()
        return [
            a
            for a in self.audio_books.values()
            if _matches(a.title, needle) or _matches(a.author, needle) or _matches(a.description, needle)
        ]

    # ------------------------------------------------------------------
    # User library

    def get_user_library(self, user_id: int) -> List[UserLibraryEntry]:
        return [e for e in self.user_library.values() if e.user_id == user_id]

    def add_to_library(self, data: InsertUserLibrary) -> UserLibraryEntry:
        return self._insert("user_library", UserLibraryEntry, added_at=_now(), **data.model_dump())

    def update_progress(
        self,
        user_id: int,
        book_id: Optional[int] = None,
        audio_book_id: Optional[int] = None,
        progress: int = 0,
    ) -> bool:
        """Overwrite the progress of the user's entry for one book or audio book.

        Returns ``False`` when the user has no such entry; the library is
        left untouched in that case.
        """
        _check_reference(book_id, audio_book_id)
        with self._lock:
            entry = next(
                (
                    e
                    for e in self.user_library.values()
                    if e.user_id == user_id and _content_matches(e, book_id, audio_book_id)
                ),
                None,
            )
            if entry is None:
                logger.debug(
                    "No library entry for user=%s book=%s audio_book=%s",
                    user_id, book_id, audio_book_id,
                )
                return False
            self.user_library[entry.id] = entry.model_copy(update={"progress": progress})
        return True

    # ------------------------------------------------------------------
    # Purchases

    def get_user_purchases(self, user_id: int) -> List[Purchase]:
        return [p for p in self.purchases.values() if p.user_id == user_id]

    def create_purchase(self, data: InsertPurchase) -> Purchase:
        purchase = self._insert("purchases", Purchase, purchased_at=_now(), **data.model_dump())
        logger.info(
            "Purchase %s recorded for user=%s book=%s audio_book=%s",
            purchase.id, purchase.user_id, purchase.book_id, purchase.audio_book_id,
        )
        return purchase

    def has_purchased(
        self, user_id: int, book_id: Optional[int] = None, audio_book_id: Optional[int] = None
    ) -> bool:
        _check_reference(book_id, audio_book_id)
        return any(
            p.user_id == user_id and _content_matches(p, book_id, audio_book_id)
            for p in self.purchases.values()
        )

    # ------------------------------------------------------------------
    # Shop products

    def get_shop_products(self) -> List[ShopProduct]:
        return [p for p in self.shop_products.values() if p.is_active]

    def get_shop_product(self, product_id: int) -> Optional[ShopProduct]:
        return self.shop_products.get(product_id)

    def create_shop_product(self, data: InsertShopProduct) -> ShopProduct:
        return self._insert("shop_products", ShopProduct, created_at=_now(), **data.model_dump())

    def update_shop_product(
        self, product_id: int, data: Union[ShopProductUpdate, Changes]
    ) -> Optional[ShopProduct]:
        return self._update("shop_products", product_id, data)

    def delete_shop_product(self, product_id: int) -> bool:
        """Deactivate a product; it stays reachable by id."""
        if not self._set_flag("shop_products", product_id, "is_active", False):
            return False
        logger.info("Shop product %s deactivated", product_id)
        return True
