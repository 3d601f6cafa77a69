# rizyland/models.py
"""
Pydantic models shared by the store and the HTTP routers.

Entities keep snake_case attribute names in Python and are exposed as
camelCase on the wire (``coverImage``, ``categoryId`` ...). Both spellings
are accepted on input so the store can be fed from Python code as well as
from JSON payloads.

``Insert*`` models describe what a client may send on creation, ``*Update``
models carry partial updates: only the fields that were actually sent are
merged onto the stored record.
"""

from datetime import datetime
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContentReference(CamelModel):
    """Mixin for payloads pointing at exactly one book or audio book."""

    book_id: Optional[int] = None
    audio_book_id: Optional[int] = None

    @model_validator(mode="after")
    def check_single_content_item(self):
        if (self.book_id is None) == (self.audio_book_id is None):
            raise ValueError("Exactly one of bookId or audioBookId is required")
        return self


class PartialUpdate(CamelModel):
    """Base for partial updates.

    Every field is optional so it can be left out, but fields listed in
    ``NOT_NULL`` may not be sent as an explicit ``null``.
    """

    NOT_NULL: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def check_not_null(self):
        nulled = sorted(
            to_camel(name)
            for name in self.model_fields_set & self.NOT_NULL
            if getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self


# ---------------------------------------------------------------------------
# Users & categories


class InsertUser(CamelModel):
    username: str = Field(min_length=1)


class User(CamelModel):
    id: int
    username: str


class InsertCategory(CamelModel):
    name: str
    description: Optional[str] = None
    icon: str


class Category(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    icon: str


# ---------------------------------------------------------------------------
# Books


class InsertBook(CamelModel):
    title: str
    author: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    content: str
    category_id: Optional[int] = None
    age_group: str
    is_premium: bool = False
    # Prices are stored in kopecks.
    price: Optional[int] = Field(default=None, ge=0)
    reading_time: Optional[int] = Field(default=None, ge=0)
    is_deleted: bool = False


class BookUpdate(PartialUpdate):
    NOT_NULL: ClassVar[FrozenSet[str]] = frozenset(
        {"title", "author", "content", "age_group", "is_premium"}
    )

    title: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    content: Optional[str] = None
    category_id: Optional[int] = None
    age_group: Optional[str] = None
    is_premium: Optional[bool] = None
    price: Optional[int] = Field(default=None, ge=0)
    reading_time: Optional[int] = Field(default=None, ge=0)


class Book(InsertBook):
    id: int
    created_at: datetime


# ---------------------------------------------------------------------------
# Audio books


class InsertAudioBook(CamelModel):
    title: str
    author: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    audio_url: str
    # Duration in seconds.
    duration: int = Field(ge=0)
    category_id: Optional[int] = None
    age_group: str
    is_premium: bool = False
    price: Optional[int] = Field(default=None, ge=0)
    narrator: Optional[str] = None
    is_deleted: bool = False


class AudioBookUpdate(PartialUpdate):
    NOT_NULL: ClassVar[FrozenSet[str]] = frozenset(
        {"title", "author", "audio_url", "duration", "age_group", "is_premium"}
    )

    title: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    audio_url: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[int] = None
    age_group: Optional[str] = None
    is_premium: Optional[bool] = None
    price: Optional[int] = Field(default=None, ge=0)
    narrator: Optional[str] = None


class AudioBook(InsertAudioBook):
    id: int
    created_at: datetime


# ---------------------------------------------------------------------------
# Library & purchases


class InsertUserLibrary(ContentReference):
    user_id: int
    progress: int = Field(default=0, ge=0)


class UserLibraryEntry(CamelModel):
    id: int
    user_id: int
    book_id: Optional[int] = None
    audio_book_id: Optional[int] = None
    progress: int = 0
    added_at: datetime


class ProgressUpdate(ContentReference):
    user_id: int
    progress: int = Field(ge=0)


class InsertPurchase(ContentReference):
    user_id: int


class Purchase(CamelModel):
    id: int
    user_id: int
    book_id: Optional[int] = None
    audio_book_id: Optional[int] = None
    purchased_at: datetime


class PurchaseCheck(CamelModel):
    has_purchased: bool


# ---------------------------------------------------------------------------
# Shop


class InsertShopProduct(CamelModel):
    name: str = Field(min_length=1)
    description: str
    price: int = Field(ge=0)
    # Free-text label, unrelated to the Category entity.
    category: str
    image_url: str = ""
    stock: int = Field(default=0, ge=0)
    is_active: bool = True


class ShopProductUpdate(PartialUpdate):
    NOT_NULL: ClassVar[FrozenSet[str]] = frozenset(
        {"name", "description", "price", "category", "image_url", "stock", "is_active"}
    )

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = None
    image_url: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class ShopProduct(InsertShopProduct):
    id: int
    created_at: datetime


# ---------------------------------------------------------------------------
# Generic responses


class MessageResponse(BaseModel):
    message: str


class UploadResult(CamelModel):
    message: str
    path: str
    cover_image: Optional[str] = None
    image_url: Optional[str] = None
