"""DTO dataclasses only. Mapping logic lives in mappers.py."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CategoryDTO:
    id: Optional[int]
    name: str


@dataclass
class ProductDTO:
    id: Optional[int]
    name: str
    effect: str
    caffeine_level: str
    type: str
    category_id: int
    images: List[str] = field(default_factory=list)

