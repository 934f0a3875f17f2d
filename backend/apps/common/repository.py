from typing import Generic, Iterable, List, Optional, Type, TypeVar

from django.db import models, transaction

T = TypeVar("T", bound=models.Model)


class GenericRepository(Generic[T]):
    """Identifier-addressed persistence for a single model.

    ``update`` and ``delete`` lock the target row so the existence check and the
    write happen in one transaction; both return ``None`` when the row is gone.
    """

    # Fields never copied from an incoming entity onto a stored row.
    protected_fields = ("id",)

    def __init__(self, model: Type[T]):
        self.model = model

    def queryset(self):
        return self.model.objects.order_by("pk")

    def get_all(self) -> List[T]:
        return list(self.queryset())

    def get(self, pk: int) -> Optional[T]:
        return self.queryset().filter(pk=pk).first()

    def add(self, obj: T) -> T:
        # ids are always store-assigned
        obj.pk = None
        obj.save(force_insert=True)
        return obj

    def update(self, pk: int, obj: T) -> Optional[T]:
        with transaction.atomic():
            current = self.model.objects.select_for_update().filter(pk=pk).first()
            if current is None:
                return None
            for field in self.editable_fields():
                setattr(current, field, getattr(obj, field))
            current.save()
        return current

    def delete(self, pk: int) -> Optional[T]:
        with transaction.atomic():
            current = self.model.objects.select_for_update().filter(pk=pk).first()
            if current is None:
                return None
            self.before_delete(current)
            current.delete()
        # Django clears the pk on delete; callers get the record as it was stored
        current.pk = pk
        return current

    def before_delete(self, obj: T) -> None:
        """Hook for releasing resources attached to ``obj`` prior to deletion."""

    def editable_fields(self) -> Iterable[str]:
        return [
            f.attname
            for f in self.model._meta.concrete_fields
            if f.attname not in self.protected_fields and not f.primary_key
        ]
