from django.urls import path

from .consumers import StorefrontEventConsumer

websocket_urlpatterns = [
    path("ws/events/", StorefrontEventConsumer.as_asgi()),
]
