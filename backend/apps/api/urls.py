from django.urls import include, path

urlpatterns = [
    # Catalog resources are mounted at the API root
    path("", include("apps.catalog.urls")),
]
