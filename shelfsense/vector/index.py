"""
Brute-force cosine similarity search over a VectorCatalog.
"""

from typing import List, Optional, Sequence, Union
import numpy as np

from .catalog import VectorCatalog
from .types import Neighbor
from ..core.errors import DimensionMismatch

QueryVector = Union[np.ndarray, Sequence[float]]


def similarity_scores(query: QueryVector, catalog: VectorCatalog) -> np.ndarray:
    """Dot product of the query with every catalog row.

    Both sides are expected to be unit length already, so this is the cosine
    similarity. The query is not re-normalized here.
    """
    query_array = np.asarray(query, dtype=np.float64).reshape(-1)
    if query_array.size != catalog.dimension:
        raise DimensionMismatch(expected=catalog.dimension, actual=query_array.size)
    # float32 rounding can push a self-match just past 1
    return np.clip(catalog.matrix @ query_array, -1.0, 1.0)


def find_nearest(query: QueryVector, catalog: Optional[VectorCatalog], k: int) -> List[Neighbor]:
    """
    Return the k catalog entries most similar to the query.

    Args:
        query: Unit-length query vector with the catalog's dimension
        catalog: Catalog to search; None or empty yields no neighbors
        k: Number of neighbors wanted, at least 1

    Returns:
        Neighbors ordered by similarity, highest first. Equal scores keep
        catalog order. Fewer than k only when the catalog is smaller than k.
    """
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")

    if catalog is None or len(catalog) == 0:
        return []

    scores = similarity_scores(query, catalog)

    # Stable sort on negated scores keeps catalog order among ties
    order = np.argsort(-scores, kind="stable")[:k]

    return [Neighbor(entry=catalog[i], similarity=float(scores[i])) for i in order]
