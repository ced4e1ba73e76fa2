import json

import pytest

from config.config import StorageConfig
from connectors.local_storage import LocalStorage
from connectors.product_repository import InMemoryProductRepository, LocalStorageProductRepository
from models.inventory import InvalidProductError
from tests.mocks import make_product


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


def test_in_memory_repository_round_trip():
    repo = InMemoryProductRepository()
    assert repo.load() == []
    repo.save([make_product("A")])
    assert [p.id for p in repo.load()] == ["A"]
    assert repo.save_count == 1


def test_empty_storage_falls_back_to_seed_catalog(storage):
    products = LocalStorageProductRepository(storage).load()
    assert len(products) == 15
    assert products[0].name == "Fresh Milk 1L"
    # Seed is not written until the collection is saved
    assert storage.get_item("retail_products") is None


def test_custom_seed(storage):
    repo = LocalStorageProductRepository(storage, seed=lambda: [make_product("S")])
    assert [p.id for p in repo.load()] == ["S"]


def test_save_then_load_keeps_order(storage):
    repo = LocalStorageProductRepository(storage)
    products = [make_product("B"), make_product("A")]

    repo.save(products)

    raw = json.loads(storage.get_item("retail_products"))
    assert [r["id"] for r in raw] == ["B", "A"]
    assert "currentStock" in raw[0]
    assert repo.load() == products


def test_invalid_json_raises(storage):
    storage.set_item("retail_products", "{not json")
    with pytest.raises(InvalidProductError, match="not valid JSON"):
        LocalStorageProductRepository(storage).load()


def test_non_array_payload_raises(storage):
    storage.set_item("retail_products", '{"id": "1"}')
    with pytest.raises(InvalidProductError, match="JSON array"):
        LocalStorageProductRepository(storage).load()


def test_invalid_record_raises_with_field(storage):
    record = make_product("BAD").to_record()
    record["expiryDate"] = "someday"
    storage.set_item("retail_products", json.dumps([record]))
    with pytest.raises(InvalidProductError) as excinfo:
        LocalStorageProductRepository(storage).load()
    assert excinfo.value.fields == ["expiryDate"]


def test_from_config(tmp_path):
    config = StorageConfig(storage_key="custom_key", storage_path=str(tmp_path / "ls.json"))
    repo = LocalStorageProductRepository.from_config(config)
    repo.save([make_product("A")])
    assert repo.storage.get_item("custom_key") is not None


@pytest.mark.parametrize("content", ["{broken", "[1, 2]"])
def test_corrupt_storage_file_raises(tmp_path, content):
    path = tmp_path / "storage.json"
    path.write_text(content)
    with pytest.raises(InvalidProductError, match="unreadable"):
        LocalStorageProductRepository(LocalStorage(path)).load()
