from typing import Any
from starlette.testclient import TestClient
from channel_lib.services.container import ServiceContainer


def register_service_on_client(client: TestClient, name: str, instance: Any) -> None:
    """Register (or replace) a service in the app's DI container for tests.

    Usage in tests:
        from tests.helpers import register_service_on_client
        register_service_on_client(client, 'song_service', fake_service)
    """
    container = getattr(client.app.state, 'container', None)
    if container is None:
        container = ServiceContainer()
        client.app.state.container = container

    container.register_singleton(name, instance)
