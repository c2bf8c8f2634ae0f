from django.urls import path

from .views import CartClearAPIView, CartItemDetailAPIView, CartListCreateAPIView

urlpatterns = [
    path("", CartListCreateAPIView.as_view(), name="cart-list-create"),
    path("clear/", CartClearAPIView.as_view(), name="cart-clear"),
    path("<str:pk>/", CartItemDetailAPIView.as_view(), name="cart-item-detail"),
]
