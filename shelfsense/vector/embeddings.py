"""
Text encoders that turn item names into unit-length embedding vectors.
The engine only depends on ITextEncoder; the model behind it is an external collaborator.
"""

from abc import ABC, abstractmethod
import hashlib
import logging
import numpy as np
from sentence_transformers import SentenceTransformer

from ..core.errors import EncoderUnavailable

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "paraphrase-multilingual-MiniLM-L12-v2"


def normalize(vector) -> np.ndarray:
    """L2-normalize a vector. Zero vectors are returned unchanged."""
    array = np.asarray(vector, dtype=np.float32).reshape(-1)
    norm = np.linalg.norm(array)
    if norm == 0:
        return array
    return array / norm


class ITextEncoder(ABC):
    """Abstract interface for text encoders."""

    @abstractmethod
    def encode(self, text: str) -> np.ndarray:
        """Encode text into a normalized vector. Raises EncoderUnavailable on failure."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass

    def is_loaded(self) -> bool:
        """Whether the encoder is ready to serve without further loading."""
        return True


class DeterministicHashEncoder(ITextEncoder):
    """Deterministic hash-based encoder for tests and offline development.

    Repeatedly hashes the text with a running counter to fill the vector, so
    the same text always maps to the same unit vector. Carries no semantic
    meaning whatsoever.
    """

    def __init__(self, dimension: int = 384):
        self.dimension = dimension

    def encode(self, text: str) -> np.ndarray:
        values = []
        counter = 0
        while len(values) < self.dimension:
            digest = hashlib.md5(f"{counter}:{text}".encode()).hexdigest()
            for i in range(0, len(digest), 8):
                value = int(digest[i:i + 8], 16)
                # Map to [-1, 1]
                values.append((value / (2**32)) * 2 - 1)
            counter += 1
        return normalize(values[:self.dimension])

    def get_dimension(self) -> int:
        return self.dimension


class SentenceTransformerEncoder(ITextEncoder):
    """Sentence transformers encoder with a lazily loaded model.

    Defaults to paraphrase-multilingual-MiniLM-L12-v2 (384 dimensions, mean
    pooling), the model the reference catalog is precomputed with. The same
    model must be used at precompute time and at query time.
    """

    def __init__(self, model_name: str = DEFAULT_MODEL_NAME):
        self.model_name = model_name
        self._model = None
        self._dimension = None

    @property
    def model(self):
        if self._model is None:
            logger.info(f"Loading embedding model: {self.model_name}")
            try:
                self._model = SentenceTransformer(self.model_name)
            except Exception as e:
                # Left unset so the next call retries the load
                logger.error(f"Failed to load embedding model {self.model_name}: {e}")
                raise EncoderUnavailable(f"Embedding model {self.model_name} could not be loaded") from e
            logger.info("Embedding model loaded successfully")
        return self._model

    def is_loaded(self) -> bool:
        return self._model is not None

    def encode(self, text: str) -> np.ndarray:
        model = self.model
        try:
            embedding = model.encode(text, convert_to_numpy=True)
        except Exception as e:
            raise EncoderUnavailable(f"Failed to encode text: {e}") from e
        return normalize(embedding)

    def get_dimension(self) -> int:
        if self._dimension is None:
            self._dimension = self.model.get_sentence_embedding_dimension()
        return self._dimension
