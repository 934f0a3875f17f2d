from rest_framework import serializers

from .dtos import CategoryDTO, ProductDTO


class CategorySerializer(serializers.Serializer):
    # 'id' is store-assigned; anything a client sends is ignored
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(max_length=100, allow_blank=False)

    def to_representation(self, instance):
        if instance is None:
            return None
        if hasattr(instance, "__dataclass_fields__"):
            return {"id": instance.id, "name": instance.name}
        return super().to_representation(instance)

    def to_dto(self) -> CategoryDTO:
        return CategoryDTO(id=None, **self.validated_data)


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO shapes used for responses
    id = serializers.IntegerField()
    name = serializers.CharField()
    effect = serializers.CharField()
    caffeineLevel = serializers.CharField(source="caffeine_level")
    type = serializers.CharField()
    categoryId = serializers.IntegerField(source="category_id")
    images = serializers.ListField(child=serializers.CharField())

    def to_representation(self, instance):
        if instance is None:
            return None
        if hasattr(instance, "__dataclass_fields__"):
            return {
                "id": instance.id,
                "name": instance.name,
                "effect": instance.effect,
                "caffeineLevel": instance.caffeine_level,
                "type": instance.type,
                "categoryId": instance.category_id,
                "images": list(instance.images),
            }
        return super().to_representation(instance)


class ProductWriteSerializer(serializers.Serializer):
    # Payload for creating/updating products. Image files travel separately as
    # multipart parts named 'images' and are handed to the store untouched.
    name = serializers.CharField(max_length=255)
    effect = serializers.CharField(max_length=255, allow_blank=True, required=False, default="")
    caffeineLevel = serializers.CharField(
        source="caffeine_level",
        max_length=100,
        allow_blank=True,
        required=False,
        default="",
    )
    type = serializers.CharField(max_length=100, allow_blank=True, required=False, default="")
    categoryId = serializers.IntegerField(source="category_id", min_value=1)

    def to_dto(self) -> ProductDTO:
        return ProductDTO(id=None, **self.validated_data)
