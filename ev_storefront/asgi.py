import os
# Daphne starts Django outside of manage.py.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ev_storefront.settings")

from django.core.asgi import get_asgi_application

django_asgi_app = get_asgi_application()

from channels.routing import ProtocolTypeRouter, URLRouter
from channels.sessions import SessionMiddlewareStack

from notifications.routing import websocket_urlpatterns
from notifications.ws_middleware import StorefrontSessionMiddleware

application = ProtocolTypeRouter({
    "http": django_asgi_app,  # normal HTTP requests
    "websocket": SessionMiddlewareStack(
        StorefrontSessionMiddleware(URLRouter(websocket_urlpatterns))
    ),
})
