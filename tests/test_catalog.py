"""
Test cases for building the immutable vector catalog.
"""

import numpy as np
import pytest

from shelfsense.core.errors import SchemaError
from shelfsense.vector import VectorCatalog, CatalogEntry, Category, load_catalog


def test_load_from_records():
    """Test building a catalog from plain mappings."""
    catalog = load_catalog([
        {"name": "milk", "vector": [1.0, 0.0], "category": "Dairy"},
        {"name": "bread", "vector": [0.0, 1.0], "category": "Bakery"},
    ])

    assert isinstance(catalog, VectorCatalog)
    assert len(catalog) == 2
    assert catalog.dimension == 2
    assert catalog.names == ["milk", "bread"]
    assert catalog[0].category is Category.DAIRY
    assert catalog[1].category is Category.BAKERY


def test_load_from_entries():
    """Test building a catalog from CatalogEntry objects."""
    entries = [
        CatalogEntry(name="salmon fillet", vector=np.array([0.0, 0.0, 1.0]), category=Category.MEAT_SEAFOOD),
        CatalogEntry(name="dog food", vector=np.array([0.0, 1.0, 0.0]), category=Category.PET_SUPPLIES),
    ]

    catalog = load_catalog(entries)

    assert catalog.names == ["salmon fillet", "dog food"]
    assert catalog.dimension == 3


def test_vectors_are_normalized():
    """Test that ingestion L2-normalizes every vector."""
    catalog = load_catalog([{"name": "rice", "vector": [3.0, 4.0], "category": "Pantry"}])

    assert np.allclose(catalog.matrix[0], [0.6, 0.8])
    assert np.isclose(np.linalg.norm(catalog[0].vector), 1.0)


def test_catalog_is_read_only():
    """Test that the shared matrix cannot be written through the catalog."""
    catalog = load_catalog([{"name": "rice", "vector": [1.0, 0.0], "category": "Pantry"}])

    with pytest.raises(ValueError):
        catalog.matrix[0, 0] = 0.5

    with pytest.raises(ValueError):
        catalog[0].vector[1] = 1.0

    assert not hasattr(catalog, "add")


def test_empty_input_rejected():
    """Test that an empty catalog cannot be built."""
    with pytest.raises(SchemaError, match="empty"):
        load_catalog([])


def test_dimension_mismatch_rejected():
    """Test that mixed dimensions fail the whole build."""
    records = [
        {"name": "milk", "vector": [1.0, 0.0, 0.0], "category": "Dairy"},
        {"name": "eggs", "vector": [1.0, 0.0], "category": "Dairy"},
    ]

    with pytest.raises(SchemaError, match="dimension"):
        load_catalog(records)


def test_zero_vector_rejected():
    """Test that a zero vector cannot be normalized and is rejected."""
    with pytest.raises(SchemaError):
        load_catalog([{"name": "air", "vector": [0.0, 0.0], "category": "Other"}])


def test_unknown_category_rejected():
    """Test that labels outside the closed category set are rejected."""
    with pytest.raises(SchemaError, match="Unknown category"):
        load_catalog([{"name": "tent", "vector": [1.0, 0.0], "category": "Camping"}])


def test_missing_field_rejected():
    """Test that incomplete records are rejected."""
    with pytest.raises(SchemaError, match="missing"):
        load_catalog([{"name": "milk", "vector": [1.0, 0.0]}])


def test_schema_error_is_value_error():
    """Test that SchemaError can be handled as a ValueError."""
    with pytest.raises(ValueError):
        load_catalog([])


def test_category_counts():
    """Test per-category counts."""
    catalog = load_catalog([
        {"name": "milk", "vector": [1.0, 0.0], "category": "Dairy"},
        {"name": "butter", "vector": [0.9, 0.1], "category": "Dairy"},
        {"name": "bagels", "vector": [0.0, 1.0], "category": "Bakery"},
    ])

    assert catalog.category_counts() == {Category.DAIRY: 2, Category.BAKERY: 1}


def test_other_is_a_valid_label():
    """Test that Other can be used as a catalog label."""
    catalog = load_catalog([{"name": "batteries", "vector": [1.0, 0.0], "category": "Other"}])
    assert catalog[0].category is Category.OTHER
