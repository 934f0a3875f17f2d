from typing import Iterable, List

from .dtos import CategoryDTO, ProductDTO
from .models import Category, Product


def _image_names(product: Product) -> List[str]:
    # Only prefetched images are read, so mapping never queries the database.
    # Unsaved products have no cache and map to an empty list.
    cache = getattr(product, "_prefetched_objects_cache", None) or {}
    return [image.file.name for image in cache.get("images", ())]


class CategoryMapper:
    @staticmethod
    def to_dto(cat: Category) -> CategoryDTO:
        return CategoryDTO(id=cat.id, name=cat.name)

    @staticmethod
    def to_entity(dto: CategoryDTO) -> Category:
        return Category(id=dto.id, name=dto.name)

    @staticmethod
    def many_to_dto(categories: Iterable[Category]) -> List[CategoryDTO]:
        return [CategoryMapper.to_dto(c) for c in categories]


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            effect=product.effect,
            caffeine_level=product.caffeine_level,
            type=product.type,
            category_id=product.category_id,
            images=_image_names(product),
        )

    @staticmethod
    def to_entity(dto: ProductDTO) -> Product:
        # Attachments are owned by the store, so images are not carried over
        return Product(
            id=dto.id,
            name=dto.name,
            effect=dto.effect,
            caffeine_level=dto.caffeine_level,
            type=dto.type,
            category_id=dto.category_id,
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
