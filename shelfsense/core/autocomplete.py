"""
Auto-complete ranking for partially typed item names.

Candidates come from one of two generators, lexical (prefix / contains on
names) or semantic (nearest neighbors with a boost for prefix matches), and
always pass through the same merge: score descending, stable on ties,
distinct names, capped at the limit.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..vector.catalog import VectorCatalog
from ..vector.index import QueryVector, find_nearest
from ..vector.types import Suggestion


@dataclass(frozen=True)
class AutocompleteConfig:
    prefix_score: float = 1.0
    contains_score: float = 0.8
    lexical_boost: float = 0.1
    min_embedding_chars: int = 3

    def __post_init__(self):
        if not self.contains_score < self.prefix_score:
            raise ValueError("contains_score must be lower than prefix_score")


DEFAULT_CONFIG = AutocompleteConfig()


def lexical_matches(text: str, catalog: VectorCatalog) -> Tuple[List[int], List[int]]:
    """Split catalog positions into prefix matches and contains-only matches.

    The input is trimmed and compared case-insensitively. Both lists keep
    catalog order.
    """
    needle = text.strip().lower()
    prefix, contains = [], []
    for position, entry in enumerate(catalog):
        name = entry.name.lower()
        if name.startswith(needle):
            prefix.append(position)
        elif needle in name:
            contains.append(position)
    return prefix, contains


def _lexical_candidates(text: str, catalog: VectorCatalog, config: AutocompleteConfig) -> List[Suggestion]:
    prefix, contains = lexical_matches(text, catalog)
    candidates = []
    for positions, score in ((prefix, config.prefix_score), (contains, config.contains_score)):
        for position in positions:
            entry = catalog[position]
            candidates.append(Suggestion(name=entry.name, category=entry.category, score=score, is_lexical_match=True))
    return candidates


def _semantic_candidates(text: str, query_vector: QueryVector, catalog: VectorCatalog,
                         limit: int, config: AutocompleteConfig) -> List[Suggestion]:
    needle = text.strip().lower()
    candidates = []
    for neighbor in find_nearest(query_vector, catalog, 2 * limit):
        entry = neighbor.entry
        if entry.name.lower().startswith(needle):
            score = min(1.0, neighbor.similarity + config.lexical_boost)
            is_lexical = True
        else:
            score = neighbor.similarity
            is_lexical = False
        candidates.append(Suggestion(name=entry.name, category=entry.category, score=score, is_lexical_match=is_lexical))
    return candidates


def merge_candidates(candidates: Iterable[Suggestion], limit: int) -> List[Suggestion]:
    """Order by score descending (stable), drop repeated names, cut at limit."""
    ranked = sorted(candidates, key=lambda s: s.score, reverse=True)

    results = []
    seen = set()
    for suggestion in ranked:
        if suggestion.name in seen:
            continue
        seen.add(suggestion.name)
        results.append(suggestion)
        if len(results) >= limit:
            break
    return results


def use_embeddings(text: str, query_vector: Optional[QueryVector],
                   config: Optional[AutocompleteConfig] = None) -> bool:
    """Whether a query is eligible for the semantic generator."""
    config = config or DEFAULT_CONFIG
    return query_vector is not None and len(text.strip()) >= config.min_embedding_chars


def suggest(partial_text: str,
            catalog: Optional[VectorCatalog],
            limit: int = 5,
            query_vector: Optional[QueryVector] = None,
            config: Optional[AutocompleteConfig] = None) -> List[Suggestion]:
    """
    Rank auto-complete suggestions for partially typed text.

    Without a query vector, or for input shorter than min_embedding_chars,
    prefix matches come first and contains matches fill the remaining slots,
    each group in catalog order. With a query vector, the 2 * limit nearest
    neighbors are ranked by similarity and prefix matches among them get a
    small capped boost.

    Args:
        partial_text: What the user has typed so far
        catalog: Reference catalog; None or empty yields no suggestions
        limit: Maximum number of suggestions
        query_vector: Normalized embedding of partial_text, if available
        config: Scoring constants

    Returns:
        At most limit suggestions with distinct names

    Raises:
        DimensionMismatch: if the query and catalog dimensions differ
    """
    config = config or DEFAULT_CONFIG

    if not partial_text or not partial_text.strip():
        return []
    if catalog is None or len(catalog) == 0 or limit < 1:
        return []

    if use_embeddings(partial_text, query_vector, config):
        candidates = _semantic_candidates(partial_text, query_vector, catalog, limit, config)
    else:
        candidates = _lexical_candidates(partial_text, catalog, config)

    return merge_candidates(candidates, limit)
