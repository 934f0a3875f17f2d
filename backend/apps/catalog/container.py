from __future__ import annotations

from .controllers import CategoryController, ProductController
from .mappers import CategoryMapper, ProductMapper
from .repositories import (
    CategoryRepository,
    ProductImageRepository,
    ProductRepository,
)


def build_category_controller() -> CategoryController:
    return CategoryController(
        categories=CategoryRepository(),
        mapper=CategoryMapper(),
    )


def build_product_controller() -> ProductController:
    return ProductController(
        products=ProductRepository(images=ProductImageRepository()),
        mapper=ProductMapper(),
    )
