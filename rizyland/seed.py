"""
Fixture catalogue for a freshly started store.

The sample data lives in ``data/seed_catalog.json``: four categories,
three books with their full text, one audio book and six shop products.
``seed_storage()`` feeds it through the regular ``create_*`` methods so
seeded records get ids and timestamps exactly like runtime records
(ids start at 1 in file order).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import InsertAudioBook, InsertBook, InsertCategory, InsertShopProduct
from .storage import MemStorage


logger = logging.getLogger(__name__)

DATA_FILE = Path(__file__).resolve().parent / "data" / "seed_catalog.json"


def load_seed_data(path: Optional[Path] = None) -> Dict[str, List[Dict[str, Any]]]:
    """Read the raw fixture file.

    Parameters
    ----------
    path : Optional[Path]
        Alternative fixture file. Defaults to the bundled
        ``seed_catalog.json``.

    Returns
    -------
    Dict[str, List[Dict[str, Any]]]
        Entries grouped by collection name (``categories``, ``books``,
        ``audio_books``, ``shop_products``). Missing groups are empty.
    """
    with (path or DATA_FILE).open("r", encoding="utf-8") as f:
        raw = json.load(f)
    return {
        key: list(raw.get(key) or [])
        for key in ("categories", "books", "audio_books", "shop_products")
    }


def seed_storage(storage: MemStorage, path: Optional[Path] = None) -> MemStorage:
    """Populate ``storage`` with the fixture catalogue and return it."""
    data = load_seed_data(path)

    for entry in data["categories"]:
        storage.create_category(InsertCategory(**entry))
    for entry in data["books"]:
        storage.create_book(InsertBook(**entry))
    for entry in data["audio_books"]:
        storage.create_audio_book(InsertAudioBook(**entry))
    for entry in data["shop_products"]:
        storage.create_shop_product(InsertShopProduct(**entry))

    logger.info(
        "Seeded catalogue: %s categories, %s books, %s audio books, %s shop products",
        len(data["categories"]),
        len(data["books"]),
        len(data["audio_books"]),
        len(data["shop_products"]),
    )
    return storage
