from django.utils.deprecation import MiddlewareMixin

from common.session import DjangoSessionProvider


class SessionTokenMiddleware(MiddlewareMixin):
    """
    Hands every request a SessionProvider and, when the visitor is signed in
    and the caller sent no Authorization header, fills it in from the session
    so proxied calls carry the bearer token.
    """

    def process_request(self, request):
        provider = DjangoSessionProvider(request.session)
        request.storefront_session = provider

        if not request.META.get("HTTP_AUTHORIZATION"):
            token = provider.get_token()
            if token:
                request.META["HTTP_AUTHORIZATION"] = f"Bearer {token}"
        return None
