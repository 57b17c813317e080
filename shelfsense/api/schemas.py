"""
Request and response models for the classification API.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from ..vector.types import ClassificationResult, Suggestion


class TextRequest(BaseModel):
    text: str

    @field_validator('text')
    @classmethod
    def text_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('text cannot be empty')
        return v


class CategoryRequest(TextRequest):
    pass


class EmbedRequest(TextRequest):
    pass


class SuggestRequest(BaseModel):
    text: str
    limit: Optional[int] = Field(default=None, ge=1, le=50)


class ItemModel(BaseModel):
    name: str
    category: str


class NeighborModel(BaseModel):
    item: ItemModel
    similarity: float


class CategoryResponse(BaseModel):
    category: str
    emoji: str
    confidence: float
    neighbors: List[NeighborModel]

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "CategoryResponse":
        return cls(
            category=result.category.value,
            emoji=result.category.emoji,
            confidence=result.confidence,
            neighbors=[
                NeighborModel(
                    item=ItemModel(name=n.entry.name, category=n.entry.category.value),
                    similarity=n.similarity
                )
                for n in result.neighbors
            ]
        )


class SuggestionModel(BaseModel):
    name: str
    category: str
    score: float
    is_lexical_match: bool

    @classmethod
    def from_suggestion(cls, suggestion: Suggestion) -> "SuggestionModel":
        return cls(
            name=suggestion.name,
            category=suggestion.category.value,
            score=suggestion.score,
            is_lexical_match=suggestion.is_lexical_match
        )


class SuggestResponse(BaseModel):
    suggestions: List[SuggestionModel]


class EmbedResponse(BaseModel):
    vector: List[float]
    dimension: int


class HealthResponse(BaseModel):
    status: str
    version: str
    model_loaded: bool
    catalog_size: int
    dimension: Optional[int] = None
