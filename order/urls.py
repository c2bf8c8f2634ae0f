from django.urls import path

from .views import OrderProxyView

urlpatterns = [
    path("", OrderProxyView.as_view(), name="order-proxy"),
]
