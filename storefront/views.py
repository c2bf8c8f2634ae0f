import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import StorefrontError
from common.session import session_for
from product.client import ProductClient

from .hero import HeroSlider

logger = logging.getLogger(__name__)

HERO_KEY = "hero"


def _slider(request):
    saved = request.session.get(HERO_KEY) or {}
    return HeroSlider(current=saved.get("current", 0), playing=saved.get("playing", True))


def _save(request, slider):
    request.session[HERO_KEY] = {"current": slider.current, "playing": slider.playing}


class HomeView(APIView):
    """Landing page: hero carousel plus featured products."""

    def get(self, request):
        try:
            featured = ProductClient(session_for(request)).get_featured_products()
        except StorefrontError:
            logger.exception("Error fetching featured products")
            featured = []
        return Response({"hero": _slider(request).as_dict(), "featured": featured})


class HeroSliderView(APIView):
    """
    POST {"action": "next" | "prev" | "go_to" | "toggle_play" | "tick", "index": n}
    """

    ACTIONS = ("next", "prev", "go_to", "toggle_play", "tick")

    def get(self, request):
        return Response(_slider(request).as_dict())

    def post(self, request):
        action = request.data.get("action")
        if action not in self.ACTIONS:
            return Response({"detail": f"action must be one of {', '.join(self.ACTIONS)}"},
                            status=status.HTTP_400_BAD_REQUEST)

        slider = _slider(request)
        if action == "go_to":
            try:
                slider.go_to(int(request.data.get("index")))
            except (TypeError, ValueError, IndexError):
                return Response({"detail": "index out of range"}, status=status.HTTP_400_BAD_REQUEST)
        else:
            getattr(slider, action)()

        _save(request, slider)
        return Response(slider.as_dict())
