"""
Vector layer: immutable catalog, similarity search and text encoders.
"""

# Package initialization for vector module
from .types import Category, CatalogEntry, Neighbor, ClassificationResult, Suggestion, CATEGORY_EMOJIS
from .catalog import VectorCatalog, load_catalog
from .index import find_nearest, similarity_scores
from .embeddings import ITextEncoder, DeterministicHashEncoder, SentenceTransformerEncoder, normalize

__all__ = [
    'Category',
    'CatalogEntry',
    'Neighbor',
    'ClassificationResult',
    'Suggestion',
    'CATEGORY_EMOJIS',
    'VectorCatalog',
    'load_catalog',
    'find_nearest',
    'similarity_scores',
    'ITextEncoder',
    'DeterministicHashEncoder',
    'SentenceTransformerEncoder',
    'normalize'
]
