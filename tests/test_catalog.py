"""Tests for the product catalog and its loader."""

import dataclasses
import random

import pytest

from bundle_ga.data import Catalog, CatalogLoader, ProductRecord


@pytest.fixture
def loader():
    return CatalogLoader()


def write_catalog(tmp_path, text):
    path = tmp_path / "products.txt"
    path.write_text(text)
    return path


def test_code_index_is_sorted_ascending():
    catalog = Catalog({
        30: ProductRecord(family=1, price=100),
        10: ProductRecord(family=2, price=200),
        20: ProductRecord(family=1, price=300),
    })

    assert catalog.code_index == (10, 20, 30)
    assert list(catalog) == [10, 20, 30]
    assert catalog.record_at(0) == ProductRecord(family=2, price=200)
    assert catalog.families == (1, 2)


def test_catalog_accepts_tuples():
    catalog = Catalog({5: (3, 1000)})

    assert catalog[5] == ProductRecord(family=3, price=1000)
    assert len(catalog) == 1


def test_catalog_is_read_only(four_product_catalog):
    with pytest.raises(TypeError):
        four_product_catalog[50] = ProductRecord(family=0, price=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        four_product_catalog[10].price = 1


def test_generate_draws_distinct_ids_in_range(loader):
    catalog = loader.generate(200, max_price=10000, num_families=10, rng=random.Random(1))

    assert len(catalog) == 200
    for product_id, record in catalog.items():
        assert 10000 <= product_id < 99999
        assert 0 <= record.family < 10
        assert 0 <= record.price < 10000


def test_generate_is_reproducible(loader):
    first = loader.generate(16, max_price=10000, num_families=10, rng=random.Random(4))
    second = loader.generate(16, max_price=10000, num_families=10, rng=random.Random(4))

    assert dict(first) == dict(second)


def test_generate_rejects_bad_arguments(loader):
    with pytest.raises(ValueError):
        loader.generate(0, max_price=100, num_families=2)
    with pytest.raises(ValueError):
        loader.generate(4, max_price=0, num_families=2)
    with pytest.raises(ValueError):
        loader.generate(4, max_price=100, num_families=0)


def test_load_csv(loader, tmp_path):
    path = write_catalog(tmp_path, "20,1,3000\n10, 0, 2500\n30,1,0\n")

    catalog = loader.load_csv(path)

    assert catalog.code_index == (10, 20, 30)
    assert catalog[10] == ProductRecord(family=0, price=2500)
    assert catalog[30].price == 0


@pytest.mark.parametrize("text", [
    "10,0,abc\n",
    "10,0,100\n20,1\n",
    "10,,100\n",
    "10,0,12.5\n",
    "10,0,100\n10,1,200\n",
    "10,0,-5\n",
    "10,0\n20,1\n",
])
def test_load_csv_rejects_malformed_records(loader, tmp_path, text):
    with pytest.raises(ValueError):
        loader.load_csv(write_catalog(tmp_path, text))


def test_load_csv_names_offending_row(loader, tmp_path):
    path = write_catalog(tmp_path, "10,0,100\n20,1,oops\n")

    with pytest.raises(ValueError, match="row 2"):
        loader.load_csv(path)


def test_load_csv_rejects_empty_file(loader, tmp_path):
    with pytest.raises(ValueError):
        loader.load_csv(write_catalog(tmp_path, ""))


def test_saved_catalog_loads_back(loader, tmp_path, random_catalog):
    path = loader.save_csv(random_catalog, tmp_path / "out" / "products.csv")

    assert dict(loader.load_csv(path)) == dict(random_catalog)
