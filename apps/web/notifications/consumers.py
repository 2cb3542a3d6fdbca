"""
Websocket consumer for real-time notifications.

Client frames: {"event": "join_order_room" | "leave_order_room", "data": {"orderId": ...}}
Server frames: {"event": <name>, "data": {...}}
"""

import logging
from typing import Any

from asgiref.sync import async_to_sync
from channels.generic.websocket import JsonWebsocketConsumer
from pydantic import ValidationError

from apps.web.orders.models import Order

from .events import BROADCAST_GROUP, order_room, restaurant_room
from .schemas import RoomRequest

logger = logging.getLogger(__name__)


class NotificationConsumer(JsonWebsocketConsumer):
    """
    One socket per connected client.

    Every socket joins the broadcast group. A restaurant admin also joins its
    restaurant's group. Customers join order rooms explicitly.
    """

    def connect(self) -> None:
        user = self.scope.get("user")
        if user is None or not user.is_authenticated:
            logger.warning("Rejected anonymous websocket connection")
            self.close()
            return

        self.user = user
        self.groups_joined: set[str] = set()
        self.accept()

        self._join(BROADCAST_GROUP)
        if user.is_restaurant_admin and user.restaurant_id:
            self._join(restaurant_room(user.restaurant_id))

        logger.info("Websocket connected for user %s", user.pk)

    def disconnect(self, code: int) -> None:
        for group in getattr(self, "groups_joined", set()):
            self._leave(group)

    def receive_json(self, content: Any, **kwargs: Any) -> None:
        if not isinstance(content, dict):
            self._error("Malformed frame")
            return

        event = content.get("event")
        handler = {
            "join_order_room": self._join_order_room,
            "leave_order_room": self._leave_order_room,
        }.get(event)
        if handler is None:
            self._error(f"Unknown event: {event}")
            return

        try:
            request = RoomRequest.model_validate(content.get("data") or {})
        except ValidationError:
            self._error("orderId is required")
            return

        handler(request.order_id)

    def notify(self, message: dict[str, Any]) -> None:
        """Handler for group_send messages of type "notify"."""
        self.send_json({"event": message["event"], "data": message["data"]})

    # -------------------------------------------------------------------------
    # Room management
    # -------------------------------------------------------------------------

    def _join_order_room(self, order_id: int) -> None:
        order = Order.objects.filter(pk=order_id).first()
        if order is None or not self._may_watch(order):
            logger.warning("User %s denied order room %s", self.user.pk, order_id)
            self._error("Not allowed to join this order room")
            return

        self._join(order_room(order_id))
        self.send_json({"event": "joined_order_room", "data": {"orderId": order_id}})

    def _leave_order_room(self, order_id: int) -> None:
        group = order_room(order_id)
        if group in self.groups_joined:
            self._leave(group)
            self.groups_joined.discard(group)

    def _may_watch(self, order: Order) -> bool:
        if self.user.is_superadmin:
            return True
        if self.user.is_restaurant_admin:
            return order.restaurant_id == self.user.restaurant_id
        return order.user_id == self.user.pk

    def _join(self, group: str) -> None:
        async_to_sync(self.channel_layer.group_add)(group, self.channel_name)
        self.groups_joined.add(group)

    def _leave(self, group: str) -> None:
        async_to_sync(self.channel_layer.group_discard)(group, self.channel_name)

    def _error(self, message: str) -> None:
        self.send_json({"event": "error", "data": {"message": message}})
