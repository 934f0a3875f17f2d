from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from django.core.files import File
from django.urls import reverse

from apps.common import get_logger
from .dtos import CategoryDTO, ProductDTO
from .mappers import CategoryMapper, ProductMapper
from .protocols import (
    CategoryMapperProtocol,
    CategoryRepositoryProtocol,
    ProductMapperProtocol,
    ProductRepositoryProtocol,
)
from .results import Created, NotFound, Ok, Outcome

logger = get_logger(__name__).bind(component="catalog", layer="controller")

LocationResolver = Callable[[int], str]


def category_location(category_id: int) -> str:
    return reverse("api-categories-detail", args=[category_id])


def product_location(product_id: int) -> str:
    return reverse("api-products-detail", args=[product_id])


class CategoryController:
    def __init__(
        self,
        categories: CategoryRepositoryProtocol,
        mapper: CategoryMapperProtocol = CategoryMapper(),
        location_for: LocationResolver = category_location,
    ):
        self.categories = categories
        self.mapper = mapper
        self.location_for = location_for
        self.logger = logger.bind(controller="CategoryController")

    def list(self) -> Ok[List[CategoryDTO]]:
        self.logger.debug("Listing categories")
        return Ok(self.mapper.many_to_dto(self.categories.get_all()))

    def get(self, category_id: int) -> Outcome[CategoryDTO]:
        self.logger.debug("Fetching category", category_id=category_id)
        category = self.categories.get(category_id)
        if category is None:
            return NotFound("Category", category_id)
        return Ok(self.mapper.to_dto(category))

    def add(self, dto: CategoryDTO) -> Created[CategoryDTO]:
        self.logger.info("Creating category", name=dto.name)
        category = self.categories.add(self.mapper.to_entity(dto))
        self.logger.info("Category created", category_id=category.id)
        return Created(self.location_for(category.id), self.mapper.to_dto(category))

    def update(self, category_id: int, dto: CategoryDTO) -> Outcome[CategoryDTO]:
        self.logger.info("Updating category", category_id=category_id)
        category = self.categories.update(category_id, self.mapper.to_entity(dto))
        if category is None:
            return NotFound("Category", category_id)
        self.logger.info("Category updated", category_id=category_id)
        return Ok(self.mapper.to_dto(category))

    def delete(self, category_id: int) -> Outcome[List[CategoryDTO]]:
        """Delete a category and answer with the categories that remain."""
        self.logger.info("Deleting category", category_id=category_id)
        deleted = self.categories.delete(category_id)
        if deleted is None:
            return NotFound("Category", category_id)
        remaining = self.mapper.many_to_dto(self.categories.get_all())
        self.logger.info(
            "Category deleted", category_id=category_id, remaining=len(remaining)
        )
        return Ok(remaining)


class ProductController:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        mapper: ProductMapperProtocol = ProductMapper(),
        location_for: LocationResolver = product_location,
    ):
        self.products = products
        self.mapper = mapper
        self.location_for = location_for
        self.logger = logger.bind(controller="ProductController")

    def list(self) -> Ok[List[ProductDTO]]:
        self.logger.debug("Listing products")
        return Ok(self.mapper.many_to_dto(self.products.get_all()))

    def get(self, product_id: int) -> Outcome[ProductDTO]:
        self.logger.debug("Fetching product", product_id=product_id)
        product = self.products.get(product_id)
        if product is None:
            return NotFound("Product", product_id)
        return Ok(self.mapper.to_dto(product))

    def add(
        self, dto: ProductDTO, attachments: Optional[Sequence[File]] = None
    ) -> Created[ProductDTO]:
        self.logger.info(
            "Creating product",
            name=dto.name,
            category_id=dto.category_id,
            attachments=len(attachments or ()),
        )
        product = self.products.add(self.mapper.to_entity(dto), attachments)
        self.logger.info("Product created", product_id=product.id)
        return Created(self.location_for(product.id), self.mapper.to_dto(product))

    def update(
        self,
        product_id: int,
        dto: ProductDTO,
        attachments: Optional[Sequence[File]] = None,
    ) -> Outcome[ProductDTO]:
        self.logger.info(
            "Updating product",
            product_id=product_id,
            attachments=len(attachments or ()),
        )
        product = self.products.update(
            product_id, self.mapper.to_entity(dto), attachments
        )
        if product is None:
            return NotFound("Product", product_id)
        self.logger.info("Product updated", product_id=product_id)
        return Ok(self.mapper.to_dto(product))

    def delete(self, product_id: int) -> Outcome[List[ProductDTO]]:
        """Delete a product and answer with the full current product list."""
        self.logger.info("Deleting product", product_id=product_id)
        deleted = self.products.delete(product_id)
        if deleted is None:
            return NotFound("Product", product_id)
        current = self.mapper.many_to_dto(self.products.get_all())
        self.logger.info("Product deleted", product_id=product_id, current=len(current))
        return Ok(current)
