"""
Category service: composes the text encoder with the classifier and the autocomplete ranker.
Encoder failures are recovered here and never reach the caller of classify_text / suggest_text.
"""

from typing import Any, Dict, List, Optional
import numpy as np

from .autocomplete import AutocompleteConfig, suggest, use_embeddings
from .classifier import ClassifierConfig, classify, lexical_fallback
from .errors import ConfigError, EncoderUnavailable, SchemaError
from ..util.logging import logger
from ..vector.catalog import VectorCatalog
from ..vector.embeddings import ITextEncoder
from ..vector.types import ClassificationResult, Suggestion


class CategoryService:
    """
    High-level classification and suggestion service over a shared catalog.

    The catalog may be None (no reference data available); every operation
    then degrades to the Other / empty results.
    """

    def __init__(self,
                 catalog: Optional[VectorCatalog],
                 encoder: Optional[ITextEncoder],
                 classifier_config: Optional[ClassifierConfig] = None,
                 autocomplete_config: Optional[AutocompleteConfig] = None,
                 semantic_suggestions: bool = True):
        self.catalog = catalog
        self.encoder = encoder
        self.classifier_config = classifier_config or ClassifierConfig()
        self.autocomplete_config = autocomplete_config or AutocompleteConfig()
        self.semantic_suggestions = semantic_suggestions

    def _try_encode(self, text: str, operation: str) -> Optional[np.ndarray]:
        if self.encoder is None:
            return None
        try:
            return self.encoder.encode(text)
        except EncoderUnavailable as e:
            logger.log_encoder_failure(operation, e, text)
            return None

    def classify_text(self, text: str) -> ClassificationResult:
        """
        Classify free text.

        Falls back to name-prefix classification when the encoder cannot
        produce a vector. DimensionMismatch between encoder and catalog is a
        deployment error and propagates.
        """
        if not text or not text.strip():
            return ClassificationResult.uncertain()

        query_vector = self._try_encode(text.strip(), "classify")
        if query_vector is None:
            result = lexical_fallback(text, self.catalog)
            logger.log_classification(text, result.category.value, result.confidence, method="lexical_fallback")
            return result

        result = classify(query_vector, self.catalog, self.classifier_config)
        logger.log_classification(text, result.category.value, result.confidence)
        return result

    def suggest_text(self, text: str, limit: int = 5) -> List[Suggestion]:
        """Rank suggestions for partial text, embedding it only when it is long enough."""
        if not text or not text.strip() or self.catalog is None:
            return []

        query_vector = None
        if self.semantic_suggestions and len(text.strip()) >= self.autocomplete_config.min_embedding_chars:
            query_vector = self._try_encode(text.strip(), "suggest")

        suggestions = suggest(text, self.catalog, limit=limit, query_vector=query_vector,
                              config=self.autocomplete_config)

        mode = "hybrid" if use_embeddings(text, query_vector, self.autocomplete_config) else "lexical"
        logger.log_suggestion(text, len(suggestions), mode)
        return suggestions

    def embed_text(self, text: str) -> np.ndarray:
        """Return the normalized embedding of text. Raises EncoderUnavailable."""
        if self.encoder is None:
            raise EncoderUnavailable("No text encoder configured")
        return self.encoder.encode(text)

    def health(self) -> Dict[str, Any]:
        return {
            "model_loaded": bool(self.encoder is not None and self.encoder.is_loaded()),
            "catalog_size": len(self.catalog) if self.catalog is not None else 0,
            "dimension": self.catalog.dimension if self.catalog is not None else None,
        }


def build_category_service() -> CategoryService:
    """Build the service from environment configuration.

    A missing or invalid catalog file leaves the service running without a
    catalog rather than failing startup. Invalid settings raise ConfigError.
    """
    from . import config
    from ..vector.catalog_io import read_catalog_file

    issues = config.validate_config()
    if issues:
        logger.log_operation("config.validate", "failed", {"issues": issues})
        raise ConfigError(issues)

    catalog_path = config.get_catalog_path()
    catalog = None
    try:
        catalog = read_catalog_file(catalog_path)
        logger.log_catalog_load(str(catalog_path), len(catalog), catalog.dimension)
    except SchemaError as e:
        logger.log_operation("catalog.load", "failed", {"source": str(catalog_path), "error": str(e)})

    return CategoryService(
        catalog=catalog,
        encoder=config.get_text_encoder(),
        classifier_config=config.get_classifier_config(),
        autocomplete_config=config.get_autocomplete_config(),
        semantic_suggestions=config.semantic_suggestions_enabled(),
    )
