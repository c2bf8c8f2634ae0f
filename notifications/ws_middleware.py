from channels.db import database_sync_to_async

from common.session import DjangoSessionProvider


@database_sync_to_async
def get_session_user_id(session):
    return DjangoSessionProvider(session).get_user_id()


class StorefrontSessionMiddleware:
    """Puts the signed-in user's id on the socket scope; guests get None."""

    def __init__(self, inner):
        self.inner = inner

    async def __call__(self, scope, receive, send):
        session = scope.get("session")
        scope["user_id"] = await get_session_user_id(session) if session is not None else None
        return await self.inner(scope, receive, send)
