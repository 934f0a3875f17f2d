import types
import unittest

from apps.catalog.dtos import CategoryDTO, ProductDTO
from apps.catalog.mappers import CategoryMapper, ProductMapper
from apps.catalog.models import Category, Product


def stub_images(names=None):
    return [
        types.SimpleNamespace(file=types.SimpleNamespace(name=n))
        for n in (names or [])
    ]


class StubProduct:
    def __init__(self, product_id: int, name: str, images=None):
        self.id = product_id
        self.name = name
        self.effect = "Calming"
        self.caffeine_level = "Low caffeine"
        self.type = "Loose leaf"
        self.category_id = 4
        # Same shape as a product loaded with prefetch_related("images")
        self._prefetched_objects_cache = {"images": stub_images(images)}


class CategoryMapperTests(unittest.TestCase):
    def test_category_mapper_basic(self):
        dto = CategoryMapper.to_dto(Category(id=1, name="Black tea"))
        self.assertEqual(dto, CategoryDTO(id=1, name="Black tea"))

    def test_category_many_preserves_order(self):
        categories = [Category(id=2, name="B"), Category(id=1, name="A")]
        dtos = CategoryMapper.many_to_dto(categories)
        self.assertEqual([d.id for d in dtos], [2, 1])

    def test_to_entity_builds_unsaved_model(self):
        entity = CategoryMapper.to_entity(CategoryDTO(id=None, name="White tea"))
        self.assertIsInstance(entity, Category)
        self.assertIsNone(entity.pk)
        self.assertEqual(entity.name, "White tea")

    def test_round_trip_preserves_shared_fields(self):
        for category in (Category(id=1, name="Black tea"), Category(id=9, name="Øolong")):
            restored = CategoryMapper.to_entity(CategoryMapper.to_dto(category))
            self.assertEqual((restored.id, restored.name), (category.id, category.name))


class ProductMapperTests(unittest.TestCase):
    def test_product_mapper_with_images(self):
        dto = ProductMapper.to_dto(StubProduct(3, "Silver Needle", ["a.png", "b.png"]))
        self.assertEqual(dto.id, 3)
        self.assertEqual(dto.caffeine_level, "Low caffeine")
        self.assertEqual(dto.category_id, 4)
        self.assertEqual(dto.images, ["a.png", "b.png"])

    def test_product_mapper_without_prefetched_images(self):
        product = StubProduct(4, "Solo")
        del product._prefetched_objects_cache
        self.assertEqual(ProductMapper.to_dto(product).images, [])

    def test_to_entity_ignores_images(self):
        dto = ProductDTO(
            id=None,
            name="Matcha",
            effect="Focus",
            caffeine_level="High caffeine",
            type="Powder",
            category_id=2,
            images=["ignored.png"],
        )
        entity = ProductMapper.to_entity(dto)
        self.assertIsInstance(entity, Product)
        self.assertIsNone(entity.pk)
        self.assertEqual(entity.category_id, 2)
        self.assertEqual(entity.type, "Powder")

    def test_round_trip_preserves_shared_fields(self):
        fields = ("id", "name", "effect", "caffeine_level", "type", "category_id")
        product = StubProduct(7, "Chamomile", ["x.png"])
        restored = ProductMapper.to_entity(ProductMapper.to_dto(product))
        for field in fields:
            self.assertEqual(getattr(restored, field), getattr(product, field), field)

    def test_many_to_dto_preserves_order(self):
        products = [StubProduct(3, "C"), StubProduct(1, "A"), StubProduct(2, "B")]
        self.assertEqual(
            [d.name for d in ProductMapper.many_to_dto(products)], ["C", "A", "B"]
        )

    def test_model_round_trip_without_id(self):
        dto = ProductDTO(
            id=None,
            name="New Product",
            effect="Calming",
            caffeine_level="Low caffeine",
            type="Loose leaf",
            category_id=1,
        )
        restored = ProductMapper.to_dto(ProductMapper.to_entity(dto))
        self.assertEqual(restored, dto)

    def test_model_round_trip_with_id_needs_no_database(self):
        product = Product(
            id=12,
            name="Gyokuro",
            effect="Focus",
            caffeine_level="High caffeine",
            type="Loose leaf",
            category_id=2,
        )
        # Not prefetched, so the images relation must not be queried
        dto = ProductMapper.to_dto(product)
        self.assertEqual(dto.images, [])
        restored = ProductMapper.to_entity(dto)
        for field in ("id", "name", "effect", "caffeine_level", "type", "category_id"):
            self.assertEqual(getattr(restored, field), getattr(product, field), field)
