from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .signals import group_name


class StorefrontEventConsumer(AsyncJsonWebsocketConsumer):
    """Pushes cart and order events to the signed-in user's browser tabs."""

    async def connect(self):
        user_id = self.scope.get("user_id")
        if user_id is None:
            await self.close()
            return
        self.group_name = group_name(user_id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, code):
        if getattr(self, "group_name", None):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def storefront_event(self, event):
        await self.send_json(event["data"])
