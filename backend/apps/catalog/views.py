from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import created_response
from apps.common import get_logger
from .container import build_category_controller, build_product_controller
from .results import Created, NotFound
from .serializers import (
    CategorySerializer,
    ProductReadSerializer,
    ProductWriteSerializer,
)

logger = get_logger(__name__).bind(component="catalog", layer="view")

NOT_FOUND_RESPONSE = OpenApiResponse(response=ErrorResponseSerializer)


def render_outcome(request, outcome, serializer_class, *, many=False) -> Response:
    """Translate a controller outcome into its HTTP response."""
    if isinstance(outcome, NotFound):
        logger.info("Resource not found", resource=outcome.resource, id=outcome.id)
        return outcome.to_error().to_response()
    if isinstance(outcome, Created):
        return created_response(
            serializer_class(outcome.payload).data,
            request.build_absolute_uri(outcome.location),
        )
    return Response(serializer_class(outcome.payload, many=many).data)


def _attachments(request):
    files = getattr(request, "FILES", None)
    return files.getlist("images") if files else []


@extend_schema(tags=["Categories"])
class CategoryListView(APIView):
    permission_classes = [AllowAny]
    controller = build_category_controller()
    log = logger.bind(view="CategoryListView")

    @extend_schema(
        operation_id="categories_list",
        summary="List categories",
        responses={200: CategorySerializer(many=True)},
    )
    def get(self, request):
        self.log.debug("Handling category list request")
        return render_outcome(
            request, self.controller.list(), CategorySerializer, many=True
        )

    @extend_schema(
        summary="Create category",
        request=CategorySerializer,
        responses={
            201: CategorySerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info("Creating category via API", name=serializer.validated_data["name"])
        return render_outcome(
            request, self.controller.add(serializer.to_dto()), CategorySerializer
        )


@extend_schema(tags=["Categories"])
class CategoryDetailView(APIView):
    permission_classes = [AllowAny]
    controller = build_category_controller()
    log = logger.bind(view="CategoryDetailView")

    @extend_schema(
        operation_id="categories_retrieve",
        summary="Get category",
        parameters=[OpenApiParameter("category_id", int, OpenApiParameter.PATH)],
        responses={200: CategorySerializer, 404: NOT_FOUND_RESPONSE},
    )
    def get(self, request, category_id: int):
        self.log.debug("Fetching category detail", category_id=category_id)
        return render_outcome(
            request, self.controller.get(category_id), CategorySerializer
        )

    @extend_schema(
        summary="Replace category",
        request=CategorySerializer,
        responses={
            200: CategorySerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: NOT_FOUND_RESPONSE,
        },
    )
    def put(self, request, category_id: int):
        serializer = CategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info("Replacing category", category_id=category_id)
        outcome = self.controller.update(category_id, serializer.to_dto())
        return render_outcome(request, outcome, CategorySerializer)

    @extend_schema(
        summary="Delete category",
        description="Returns the categories remaining after the deletion.",
        responses={
            200: CategorySerializer(many=True),
            404: NOT_FOUND_RESPONSE,
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, category_id: int):
        self.log.info("Deleting category", category_id=category_id)
        return render_outcome(
            request, self.controller.delete(category_id), CategorySerializer, many=True
        )


@extend_schema(tags=["Products"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    controller = build_product_controller()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        responses={200: ProductReadSerializer(many=True)},
    )
    def get(self, request):
        self.log.debug("Handling product list request")
        return render_outcome(
            request, self.controller.list(), ProductReadSerializer, many=True
        )

    @extend_schema(
        summary="Create product",
        description="Send multipart/form-data with repeated 'images' parts to attach files.",
        request=ProductWriteSerializer,
        responses={
            201: ProductReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        attachments = _attachments(request)
        self.log.info(
            "Creating product via API",
            name=serializer.validated_data["name"],
            attachments=len(attachments),
        )
        outcome = self.controller.add(serializer.to_dto(), attachments)
        return render_outcome(request, outcome, ProductReadSerializer)


@extend_schema(tags=["Products"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    controller = build_product_controller()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={200: ProductReadSerializer, 404: NOT_FOUND_RESPONSE},
    )
    def get(self, request, product_id: int):
        self.log.debug("Fetching product detail", product_id=product_id)
        return render_outcome(
            request, self.controller.get(product_id), ProductReadSerializer
        )

    @extend_schema(
        summary="Replace product",
        description="Uploading new 'images' replaces the product's existing images.",
        request=ProductWriteSerializer,
        responses={
            200: ProductReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: NOT_FOUND_RESPONSE,
        },
    )
    def put(self, request, product_id: int):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        attachments = _attachments(request)
        self.log.info(
            "Replacing product", product_id=product_id, attachments=len(attachments)
        )
        outcome = self.controller.update(product_id, serializer.to_dto(), attachments)
        return render_outcome(request, outcome, ProductReadSerializer)

    @extend_schema(
        summary="Delete product",
        description="Returns the current product list after the deletion.",
        responses={200: ProductReadSerializer(many=True), 404: NOT_FOUND_RESPONSE},
    )
    def delete(self, request, product_id: int):
        self.log.info("Deleting product", product_id=product_id)
        return render_outcome(
            request, self.controller.delete(product_id), ProductReadSerializer, many=True
        )
