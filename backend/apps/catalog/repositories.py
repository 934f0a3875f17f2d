from typing import List, Optional, Sequence

from django.core.files import File
from django.db import transaction

from apps.common import get_logger
from apps.common.repository import GenericRepository
from .models import Category, Product, ProductImage

logger = get_logger(__name__).bind(component="catalog", layer="repository")


class CategoryRepository(GenericRepository[Category]):
    def __init__(self):
        super().__init__(Category)


class ProductImageRepository(GenericRepository[ProductImage]):
    """Stores product attachments through Django's configured file storage."""

    def __init__(self):
        super().__init__(ProductImage)
        self.logger = logger.bind(repository="ProductImageRepository")

    def attach(self, product: Product, files: Sequence[File]) -> List[ProductImage]:
        images = []
        written = []
        try:
            for upload in files:
                image = ProductImage(product=product)
                image.file.save(
                    getattr(upload, "name", None) or "image", upload, save=False
                )
                written.append(image.file.name)
                image.save()
                images.append(image)
        except Exception:
            self.remove_files(written)
            raise
        self.logger.debug(
            "Attached product images", product_id=product.pk, count=len(images)
        )
        return images

    def detach_all(self, product: Product) -> int:
        return self._detach(self.model.objects.filter(product_id=product.pk))

    def clear(self) -> int:
        """Drop every product image, files included."""
        return self._detach(self.model.objects.all())

    def remove_files(self, names: Sequence[str]) -> None:
        storage = self.model._meta.get_field("file").storage
        for name in names:
            storage.delete(name)

    def _detach(self, images) -> int:
        names = [image.file.name for image in images if image.file]
        count, _ = images.delete()
        if names:
            # Files only go once the surrounding transaction is committed
            transaction.on_commit(lambda: self.remove_files(names))
        return count


class ProductRepository(GenericRepository[Product]):
    def __init__(self, images: Optional[ProductImageRepository] = None):
        super().__init__(Product)
        self.images = images or ProductImageRepository()
        self.logger = logger.bind(repository="ProductRepository")

    def queryset(self):
        """Products with images prefetched to avoid N+1 during DTO mapping."""
        return super().queryset().prefetch_related("images")

    def add(
        self, product: Product, attachments: Optional[Sequence[File]] = None
    ) -> Product:
        attached: List[ProductImage] = []
        try:
            with transaction.atomic():
                product = super().add(product)
                if attachments:
                    attached = self.images.attach(product, attachments)
        except Exception:
            self._discard(attached)
            raise
        return self.get(product.pk)

    def update(
        self,
        pk: int,
        product: Product,
        attachments: Optional[Sequence[File]] = None,
    ) -> Optional[Product]:
        attached: List[ProductImage] = []
        try:
            with transaction.atomic():
                current = super().update(pk, product)
                if current is None:
                    return None
                if attachments:
                    # A new upload set replaces the previous images
                    removed = self.images.detach_all(current)
                    attached = self.images.attach(current, attachments)
                    self.logger.debug(
                        "Replaced product images",
                        product_id=pk,
                        removed=removed,
                        added=len(attached),
                    )
        except Exception:
            self._discard(attached)
            raise
        return self.get(pk)

    def before_delete(self, obj: Product) -> None:
        self.images.detach_all(obj)

    def _discard(self, attached: List[ProductImage]) -> None:
        # Rows were rolled back; the files written for them were not
        if attached:
            self.logger.warning(
                "Removing images written by a failed transaction",
                count=len(attached),
            )
            self.images.remove_files([image.file.name for image in attached])
