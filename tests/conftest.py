"""
Shared fixtures for catalog, classifier and autocomplete tests.
"""

import math
import numpy as np
import pytest

from shelfsense.vector.catalog import load_catalog
from shelfsense.vector.types import Category

# Every catalog built by these helpers lives in 3 dimensions and is searched with this query
QUERY = np.array([1.0, 0.0, 0.0])


def vector_with_similarity(similarity: float) -> list:
    """Unit vector whose dot product with QUERY equals similarity."""
    return [similarity, math.sqrt(1.0 - similarity ** 2), 0.0]


def build_catalog(items):
    """Build a catalog from (name, category, similarity-to-QUERY) triples."""
    return load_catalog([
        {"name": name, "vector": vector_with_similarity(similarity), "category": category}
        for name, category, similarity in items
    ])


@pytest.fixture
def query():
    return QUERY.copy()


@pytest.fixture
def fruit_catalog():
    """Small mixed catalog used by several tests."""
    return build_catalog([
        ("apple", Category.PRODUCE, 0.9),
        ("apple juice", Category.BEVERAGES, 0.8),
        ("pineapple", Category.PRODUCE, 0.7),
        ("milk", Category.DAIRY, 0.3),
    ])
