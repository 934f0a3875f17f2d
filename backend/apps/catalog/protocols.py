from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from django.core.files import File

    from .dtos import CategoryDTO, ProductDTO
    from .models import Category, Product


class CategoryRepositoryProtocol(Protocol):
    def get_all(self) -> List["Category"]: ...

    def get(self, pk: int) -> Optional["Category"]: ...

    def add(self, category: "Category") -> "Category": ...

    def update(self, pk: int, category: "Category") -> Optional["Category"]: ...

    def delete(self, pk: int) -> Optional["Category"]: ...


class ProductRepositoryProtocol(Protocol):
    def get_all(self) -> List["Product"]: ...

    def get(self, pk: int) -> Optional["Product"]: ...

    def add(
        self, product: "Product", attachments: Optional[Sequence["File"]] = None
    ) -> "Product": ...

    def update(
        self,
        pk: int,
        product: "Product",
        attachments: Optional[Sequence["File"]] = None,
    ) -> Optional["Product"]: ...

    def delete(self, pk: int) -> Optional["Product"]: ...


class CategoryMapperProtocol(Protocol):
    def to_dto(self, cat: "Category") -> "CategoryDTO": ...

    def to_entity(self, dto: "CategoryDTO") -> "Category": ...

    def many_to_dto(self, categories: Iterable["Category"]) -> List["CategoryDTO"]: ...


class ProductMapperProtocol(Protocol):
    def to_dto(self, product: "Product") -> "ProductDTO": ...

    def to_entity(self, dto: "ProductDTO") -> "Product": ...

    def many_to_dto(self, products: Iterable["Product"]) -> List["ProductDTO"]: ...
