from django.urls import path

from .views import CategoryListAPIView, FeaturedProductListAPIView, ProductDetailAPIView, ProductListAPIView

urlpatterns = [
    path("", ProductListAPIView.as_view(), name="product-list"),
    path("featured/", FeaturedProductListAPIView.as_view(), name="product-featured"),
    path("categories/", CategoryListAPIView.as_view(), name="product-categories"),
    path("<int:pk>/", ProductDetailAPIView.as_view(), name="product-detail"),
]
