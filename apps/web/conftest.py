"""
Pytest configuration for Django app tests.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from django.core.cache import cache
from django.test import Client as DjangoClient

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
import pytest

from apps.web.core.models import User
from apps.web.restaurant.models import Restaurant
from apps.web.restaurant.tests.factories import (
    AdminFactory,
    RestaurantFactory,
    SuperAdminFactory,
    UserFactory,
)


@pytest.fixture(autouse=True)
def _flush_channel_layer():
    """Start every test with an empty in-memory channel layer."""
    yield
    async_to_sync(get_channel_layer().flush)()


@pytest.fixture(autouse=True)
def _clear_cache():
    """Idempotency keys must not leak between tests."""
    cache.clear()


@pytest.fixture
def subscribe() -> Callable[[str], str]:
    """Join a fresh channel to a group; returns the channel name."""
    layer = get_channel_layer()

    def _subscribe(group: str) -> str:
        channel = async_to_sync(layer.new_channel)()
        async_to_sync(layer.group_add)(group, channel)
        return channel

    return _subscribe


@pytest.fixture
def receive_event() -> Callable[..., dict[str, Any] | None]:
    """Read the next group message from a channel, or None on timeout."""
    layer = get_channel_layer()

    async def _receive(channel: str, timeout: float) -> dict[str, Any] | None:
        try:
            return await asyncio.wait_for(layer.receive(channel), timeout)
        except TimeoutError:
            return None

    def _receive_event(channel: str, timeout: float = 0.5) -> dict[str, Any] | None:
        return async_to_sync(_receive)(channel, timeout)

    return _receive_event


@pytest.fixture
def restaurant() -> Restaurant:
    """An approved restaurant."""
    return RestaurantFactory(name="Spice Route")


@pytest.fixture
def customer() -> User:
    """A customer user."""
    return UserFactory(name="Asha Customer")


@pytest.fixture
def restaurant_admin(restaurant: Restaurant) -> User:
    """The admin of `restaurant`."""
    return AdminFactory(restaurant=restaurant, name="Ravi Admin")


@pytest.fixture
def superadmin() -> User:
    return SuperAdminFactory()


@pytest.fixture
def customer_client(customer: User) -> DjangoClient:
    client = DjangoClient()
    client.force_login(customer)
    return client


@pytest.fixture
def restaurant_admin_client(restaurant_admin: User) -> DjangoClient:
    client = DjangoClient()
    client.force_login(restaurant_admin)
    return client


@pytest.fixture
def superadmin_client(superadmin: User) -> DjangoClient:
    client = DjangoClient()
    client.force_login(superadmin)
    return client
