"""
Runtime configuration read from environment variables.
Accessor functions re-read the environment so settings can change between calls (and tests).
"""

import os
from pathlib import Path
from typing import List, Optional

# Catalog and source data
CATALOG_PATH = os.getenv("CATALOG_PATH", "./data/groceryEmbeddings.json")
ITEMS_PATH = os.getenv("ITEMS_PATH", "./data/groceryItems.json")

# Encoder configuration
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "sentence_transformer")  # sentence_transformer|hash
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "paraphrase-multilingual-MiniLM-L12-v2")
EMBED_DIM = int(os.getenv("EMBED_DIM", "384"))

# Classifier configuration
K_NEIGHBORS = int(os.getenv("K_NEIGHBORS", "5"))
CONFIDENCE_THRESHOLD = float(os.getenv("CONFIDENCE_THRESHOLD", "0.5"))
TOP_MATCH_THRESHOLD = os.getenv("TOP_MATCH_THRESHOLD", "0.95")  # "none" or empty disables the override
CONFIDENCE_MODE = os.getenv("CONFIDENCE_MODE", "best")  # best|mean

# Autocomplete configuration
SUGGEST_LIMIT = int(os.getenv("SUGGEST_LIMIT", "5"))
SUGGEST_MIN_EMBED_CHARS = int(os.getenv("SUGGEST_MIN_EMBED_CHARS", "3"))
SEMANTIC_SUGGEST_ENABLED = os.getenv("SEMANTIC_SUGGEST_ENABLED", "true").lower() == "true"

# HTTP configuration
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
DEBUG = os.getenv("DEBUG", "true").lower() == "true"

VERSION = "1.0.0"

VALID_EMBED_PROVIDERS = ["sentence_transformer", "hash"]
VALID_CONFIDENCE_MODES = ["best", "mean"]


def _parse_optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip().lower() in ("", "none", "off"):
        return None
    return float(raw)


def get_catalog_path() -> Path:
    return Path(os.getenv("CATALOG_PATH", CATALOG_PATH))


def get_items_path() -> Path:
    return Path(os.getenv("ITEMS_PATH", ITEMS_PATH))


def get_cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def semantic_suggestions_enabled() -> bool:
    return os.getenv("SEMANTIC_SUGGEST_ENABLED", "true").lower() == "true"


def get_classifier_config():
    """Build the classifier configuration from the environment."""
    from .classifier import ClassifierConfig

    return ClassifierConfig(
        k=int(os.getenv("K_NEIGHBORS", str(K_NEIGHBORS))),
        confidence_threshold=float(os.getenv("CONFIDENCE_THRESHOLD", str(CONFIDENCE_THRESHOLD))),
        top_match_threshold=_parse_optional_float(os.getenv("TOP_MATCH_THRESHOLD", TOP_MATCH_THRESHOLD)),
        confidence_mode=os.getenv("CONFIDENCE_MODE", CONFIDENCE_MODE),
    )


def get_autocomplete_config():
    """Build the autocomplete configuration from the environment."""
    from .autocomplete import AutocompleteConfig

    return AutocompleteConfig(
        min_embedding_chars=int(os.getenv("SUGGEST_MIN_EMBED_CHARS", str(SUGGEST_MIN_EMBED_CHARS))),
    )


def get_suggest_limit() -> int:
    return int(os.getenv("SUGGEST_LIMIT", str(SUGGEST_LIMIT)))


def get_text_encoder():
    """Get the configured text encoder implementation."""
    provider = os.getenv("EMBED_PROVIDER", EMBED_PROVIDER)

    if provider == "hash":
        from ..vector.embeddings import DeterministicHashEncoder
        return DeterministicHashEncoder(dimension=int(os.getenv("EMBED_DIM", str(EMBED_DIM))))

    # Default to the sentence-transformers model for unknown providers
    from ..vector.embeddings import SentenceTransformerEncoder
    return SentenceTransformerEncoder(os.getenv("EMBED_MODEL_NAME", EMBED_MODEL_NAME))


def validate_config() -> List[str]:
    """Validate configuration and return any issues."""
    issues = []

    provider = os.getenv("EMBED_PROVIDER", EMBED_PROVIDER)
    if provider not in VALID_EMBED_PROVIDERS:
        issues.append(f"Invalid EMBED_PROVIDER: {provider}")

    mode = os.getenv("CONFIDENCE_MODE", CONFIDENCE_MODE)
    if mode not in VALID_CONFIDENCE_MODES:
        issues.append(f"Invalid CONFIDENCE_MODE: {mode}")

    try:
        k = int(os.getenv("K_NEIGHBORS", str(K_NEIGHBORS)))
        if k < 1:
            issues.append("K_NEIGHBORS must be >= 1")
    except ValueError:
        issues.append("K_NEIGHBORS must be an integer")

    try:
        threshold = float(os.getenv("CONFIDENCE_THRESHOLD", str(CONFIDENCE_THRESHOLD)))
        if not 0.0 <= threshold <= 1.0:
            issues.append("CONFIDENCE_THRESHOLD must be between 0 and 1")
    except ValueError:
        issues.append("CONFIDENCE_THRESHOLD must be a number")

    try:
        top_match = _parse_optional_float(os.getenv("TOP_MATCH_THRESHOLD", TOP_MATCH_THRESHOLD))
        if top_match is not None and not 0.0 <= top_match <= 1.0:
            issues.append("TOP_MATCH_THRESHOLD must be between 0 and 1")
    except ValueError:
        issues.append("TOP_MATCH_THRESHOLD must be a number or 'none'")

    try:
        int(os.getenv("SUGGEST_MIN_EMBED_CHARS", str(SUGGEST_MIN_EMBED_CHARS)))
    except ValueError:
        issues.append("SUGGEST_MIN_EMBED_CHARS must be an integer")

    if provider == "hash":
        try:
            if int(os.getenv("EMBED_DIM", str(EMBED_DIM))) < 1:
                issues.append("EMBED_DIM must be >= 1")
        except ValueError:
            issues.append("EMBED_DIM must be an integer")

    try:
        if int(os.getenv("SUGGEST_LIMIT", str(SUGGEST_LIMIT))) < 1:
            issues.append("SUGGEST_LIMIT must be >= 1")
    except ValueError:
        issues.append("SUGGEST_LIMIT must be an integer")

    return issues
