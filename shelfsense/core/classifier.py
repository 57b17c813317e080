"""
Nearest-neighbor category classification.

The decision policy is a short ordered chain of guards over the k nearest
catalog entries:

1. no query vector or no catalog -> Other with zero confidence
2. best neighbor above the top-match threshold -> trust it outright
3. confidence below the gate threshold -> Other
4. otherwise a similarity-weighted vote among the neighbors
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import logging

from ..vector.catalog import VectorCatalog
from ..vector.index import QueryVector, find_nearest
from ..vector.types import Category, ClassificationResult, Neighbor

logger = logging.getLogger(__name__)

# Fixed values reported by the lexical fallback
LEXICAL_FALLBACK_CONFIDENCE = 0.7
LEXICAL_FALLBACK_LIMIT = 5


@dataclass(frozen=True)
class ClassifierConfig:
    """Deployment-wide classifier settings."""

    k: int = 5
    confidence_threshold: float = 0.5
    top_match_threshold: Optional[float] = 0.95
    confidence_mode: str = "best"  # best|mean

    def __post_init__(self):
        if self.k < 1:
            raise ValueError(f"k must be >= 1, got {self.k}")
        if self.confidence_mode not in ("best", "mean"):
            raise ValueError(f"confidence_mode must be 'best' or 'mean', got {self.confidence_mode!r}")


DEFAULT_CONFIG = ClassifierConfig()


def _confidence(neighbors: List[Neighbor], mode: str) -> float:
    if mode == "mean":
        return sum(n.similarity for n in neighbors) / len(neighbors)
    return neighbors[0].similarity


def weighted_vote(neighbors: List[Neighbor]) -> Category:
    """
    Pick the category with the greatest summed similarity.

    Weights accumulate in neighbor order (highest similarity first) and only
    a strictly greater total replaces the leader, so ties go to whichever
    category was seen first.
    """
    weights: Dict[Category, float] = {}
    for neighbor in neighbors:
        category = neighbor.entry.category
        weights[category] = weights.get(category, 0.0) + neighbor.similarity

    winner = Category.OTHER
    best_weight = float("-inf")
    for category, weight in weights.items():
        if weight > best_weight:
            winner = category
            best_weight = weight

    summary = {c.value: round(w, 4) for c, w in weights.items()}
    logger.debug(f"Vote weights: {summary} -> {winner.value}")
    return winner


def classify(query_vector: Optional[QueryVector],
             catalog: Optional[VectorCatalog],
             config: Optional[ClassifierConfig] = None) -> ClassificationResult:
    """
    Classify a query vector against the catalog.

    Args:
        query_vector: Normalized embedding of the input, or None if encoding failed
        catalog: Reference catalog; None or empty yields the Other result
        config: Classifier settings, defaults to k=5 / 0.5 / 0.95 / best

    Returns:
        ClassificationResult with neighbors in descending similarity

    Raises:
        DimensionMismatch: if the query and catalog dimensions differ
    """
    config = config or DEFAULT_CONFIG

    if query_vector is None or catalog is None or len(catalog) == 0:
        return ClassificationResult.uncertain()

    neighbors = find_nearest(query_vector, catalog, config.k)
    if not neighbors:
        return ClassificationResult.uncertain()

    best = neighbors[0]
    top_similarity = best.similarity

    # A near-identical catalog match is not diluted by weaker neighbors
    if config.top_match_threshold is not None and top_similarity > config.top_match_threshold:
        return ClassificationResult(category=best.entry.category, confidence=top_similarity, neighbors=neighbors)

    confidence = _confidence(neighbors, config.confidence_mode)
    if confidence < config.confidence_threshold:
        return ClassificationResult(category=Category.OTHER, confidence=confidence, neighbors=neighbors)

    return ClassificationResult(category=weighted_vote(neighbors), confidence=confidence, neighbors=neighbors)


def lexical_fallback(text: str,
                     catalog: Optional[VectorCatalog],
                     limit: int = LEXICAL_FALLBACK_LIMIT) -> ClassificationResult:
    """
    Classify by name prefix when no embedding is available.

    Catalog entries whose name starts with the input (case-insensitive) are
    taken in catalog order, up to limit. The category is the plurality by
    plain count, ties going to the first category seen. Confidence and every
    neighbor similarity are fixed at 0.7.
    """
    prefix = (text or "").strip().lower()
    if not prefix or catalog is None or len(catalog) == 0:
        return ClassificationResult.uncertain()

    matches = [entry for entry in catalog if entry.name.lower().startswith(prefix)][:limit]
    if not matches:
        return ClassificationResult.uncertain()

    counts: Dict[Category, int] = {}
    for entry in matches:
        counts[entry.category] = counts.get(entry.category, 0) + 1

    predicted = Category.OTHER
    max_count = 0
    for category, count in counts.items():
        if count > max_count:
            predicted = category
            max_count = count

    neighbors = [Neighbor(entry=entry, similarity=LEXICAL_FALLBACK_CONFIDENCE) for entry in matches]
    return ClassificationResult(category=predicted, confidence=LEXICAL_FALLBACK_CONFIDENCE, neighbors=neighbors)
