"""Tests for the fixture catalogue."""

import json

from rizyland.seed import DATA_FILE, load_seed_data, seed_storage
from rizyland.storage import MemStorage


def test_bundled_catalogue_counts():
    data = load_seed_data()

    assert len(data["categories"]) == 4
    assert len(data["books"]) == 3
    assert len(data["audio_books"]) == 1
    assert len(data["shop_products"]) == 6


def test_seeded_ids_follow_file_order(storage):
    assert [c.name for c in storage.get_categories()] == ["Сказки", "Приключения", "Обучающие", "Стихи"]
    assert [(b.id, b.title) for b in storage.get_books()] == [(1, "Колобок"), (2, "Репка"), (3, "Буратино")]
    assert storage.get_audio_book(1).title == "Автомобиль"
    assert [p.id for p in storage.get_shop_products()] == [1, 2, 3, 4, 5, 6]


def test_seeded_books_carry_full_text(storage):
    kolobok = storage.get_book(1)

    assert kolobok.content.startswith("Жили-были дед да баба.")
    assert kolobok.reading_time == 20
    assert storage.get_book(3).price == 19900


def test_runtime_ids_continue_after_seed(storage):
    from rizyland.models import InsertCategory

    category = storage.create_category(InsertCategory(name="Музыка", icon="🎵"))
    assert category.id == 5


def test_seed_from_custom_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps({"categories": [{"name": "Комиксы", "icon": "💥"}]}, ensure_ascii=False),
        encoding="utf-8",
    )

    seeded = seed_storage(MemStorage(), path)

    assert [c.name for c in seeded.get_categories()] == ["Комиксы"]
    assert seeded.get_books() == []


def test_data_file_ships_with_package():
    assert DATA_FILE.exists()
