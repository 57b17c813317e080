"""
Immutable in-memory catalog of reference items and their embeddings.
Built once at startup and shared read-only; rebuilt, never mutated, when reference data changes.
"""

from collections import Counter
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple, Union
import logging
import numpy as np

from .types import CatalogEntry, Category
from ..core.errors import SchemaError

logger = logging.getLogger(__name__)

CatalogRecord = Union[CatalogEntry, Mapping[str, Any]]


class VectorCatalog:
    """Read-only table of catalog entries backed by a single float32 matrix."""

    def __init__(self, entries: Tuple[CatalogEntry, ...], matrix: np.ndarray):
        # Use load_catalog() rather than calling this directly
        self._entries = entries
        self._matrix = matrix

    @property
    def entries(self) -> Tuple[CatalogEntry, ...]:
        return self._entries

    @property
    def matrix(self) -> np.ndarray:
        """Row i holds the unit vector of entries[i]."""
        return self._matrix

    @property
    def dimension(self) -> int:
        return self._matrix.shape[1]

    @property
    def names(self) -> List[str]:
        return [entry.name for entry in self._entries]

    def category_counts(self) -> Dict[Category, int]:
        """Number of entries per category, in first-seen order."""
        return dict(Counter(entry.category for entry in self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> CatalogEntry:
        return self._entries[index]

    def __repr__(self):
        return f"VectorCatalog(size={len(self)}, dimension={self.dimension})"


def _coerce_category(value: Any, name: str) -> Category:
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        raise SchemaError(f"Unknown category {value!r} for catalog item {name!r}") from None


def _coerce_record(record: CatalogRecord) -> Tuple[str, np.ndarray, Category]:
    if isinstance(record, CatalogEntry):
        return record.name, np.asarray(record.vector, dtype=np.float64), record.category

    try:
        name = record["name"]
        raw_vector = record["vector"]
        raw_category = record["category"]
    except (KeyError, TypeError) as e:
        raise SchemaError(f"Catalog record is missing a required field: {e}") from e

    if not isinstance(name, str) or not name.strip():
        raise SchemaError(f"Catalog record has an invalid name: {name!r}")

    try:
        vector = np.asarray(raw_vector, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise SchemaError(f"Catalog item {name!r} has a non-numeric vector") from e

    return name, vector, _coerce_category(raw_category, name)


def load_catalog(records: Iterable[CatalogRecord]) -> VectorCatalog:
    """
    Build an immutable catalog from a sequence of entries.

    Vectors are L2-normalized on the way in, so every row of the resulting
    matrix is unit length and similarity reduces to a dot product.

    Args:
        records: CatalogEntry objects or {name, vector, category} mappings

    Returns:
        A read-only VectorCatalog

    Raises:
        SchemaError: if the input is empty, a vector is malformed or zero,
            a category is unknown, or dimensions are not uniform
    """
    names: List[str] = []
    categories: List[Category] = []
    rows: List[np.ndarray] = []
    dimension = None

    for position, record in enumerate(records):
        name, vector, category = _coerce_record(record)

        if vector.ndim != 1 or vector.size == 0:
            raise SchemaError(f"Catalog item {name!r} must have a non-empty one-dimensional vector")

        if dimension is None:
            dimension = vector.size
        elif vector.size != dimension:
            raise SchemaError(
                f"Catalog item {name!r} at position {position} has dimension {vector.size}, "
                f"expected {dimension}"
            )

        norm = np.linalg.norm(vector)
        if not np.isfinite(norm) or norm == 0:
            raise SchemaError(f"Catalog item {name!r} has a zero or non-finite vector")

        names.append(name)
        categories.append(category)
        rows.append(vector / norm)

    if not rows:
        raise SchemaError("Cannot build a catalog from an empty set of entries")

    matrix = np.vstack(rows).astype(np.float32)
    matrix.setflags(write=False)

    entries = tuple(
        CatalogEntry(name=name, vector=matrix[i], category=category)
        for i, (name, category) in enumerate(zip(names, categories))
    )

    logger.debug(f"Built catalog with {len(entries)} entries of dimension {dimension}")
    return VectorCatalog(entries, matrix)
