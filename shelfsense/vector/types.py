"""
Value types shared by the catalog, the similarity search and the decision engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List
import numpy as np


class Category(str, Enum):
    """Closed set of grocery categories."""

    PRODUCE = "Produce"
    DAIRY = "Dairy"
    BAKERY = "Bakery"
    MEAT_SEAFOOD = "Meat & Seafood"
    PANTRY = "Pantry"
    FROZEN = "Frozen"
    SNACKS = "Snacks"
    BEVERAGES = "Beverages"
    HOUSEHOLD = "Household"
    PERSONAL_CARE = "Personal Care"
    PET_SUPPLIES = "Pet Supplies"
    OTHER = "Other"

    @property
    def emoji(self) -> str:
        return CATEGORY_EMOJIS[self]


CATEGORY_EMOJIS: Dict[Category, str] = {
    Category.PRODUCE: "🥬",
    Category.DAIRY: "🥛",
    Category.BAKERY: "🥖",
    Category.MEAT_SEAFOOD: "🥩",
    Category.PANTRY: "🥫",
    Category.FROZEN: "🧊",
    Category.SNACKS: "🍿",
    Category.BEVERAGES: "🥤",
    Category.HOUSEHOLD: "🧴",
    Category.PERSONAL_CARE: "🧼",
    Category.PET_SUPPLIES: "🐾",
    Category.OTHER: "📦",
}


@dataclass(frozen=True, eq=False)
class CatalogEntry:
    """A reference item with its precomputed embedding."""

    name: str
    """Display name of the item"""

    vector: np.ndarray
    """Unit-length embedding, read-only once owned by a catalog"""

    category: Category
    """Category label of the item"""


@dataclass(frozen=True)
class Neighbor:
    """A catalog entry paired with its similarity to a query."""

    entry: CatalogEntry
    similarity: float


@dataclass(frozen=True)
class ClassificationResult:
    """Predicted category with its confidence and supporting neighbors."""

    category: Category
    confidence: float
    neighbors: List[Neighbor] = field(default_factory=list)

    @classmethod
    def uncertain(cls) -> "ClassificationResult":
        """The Other/0/[] result used whenever there is nothing to go on."""
        return cls(category=Category.OTHER, confidence=0.0, neighbors=[])


@dataclass(frozen=True)
class Suggestion:
    """A single auto-complete suggestion."""

    name: str
    category: Category
    score: float
    is_lexical_match: bool
