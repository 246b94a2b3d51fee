"""Services package: the DI container and request-time lookup helpers."""
from .container import ServiceContainer
from .resolver import resolve_optional_service, resolve_service

__all__ = [
    "ServiceContainer",
    "resolve_service",
    "resolve_optional_service",
]
