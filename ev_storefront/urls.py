"""
URL configuration for ev_storefront project.
"""
from django.urls import path, include
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

urlpatterns = [
    path("", include("storefront.urls")),
    path("accounts/", include("accounts.urls")),
    path("products/", include("product.urls")),
    path("cart/", include("cart.urls")),
    path("checkout/", include("checkout.urls")),
    path("api/orders/", include("order.urls")),
    path("admin-panel/", include("dashboard.urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),  # OpenAPI JSON/YAML
    path("api/schema/swagger-ui/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/schema/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]
