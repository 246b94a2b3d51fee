from typing import Any, Dict


class ServiceContainer:
    """A small explicit DI container holding the application's services.

    Services are registered under a string key as ready instances and looked
    up by request handlers through `channel_lib.services.resolver`.
    """

    def __init__(self) -> None:
        self._singletons: Dict[str, Any] = {}

    def register_singleton(self, key: str, instance: Any) -> None:
        self._singletons[key] = instance

    def __contains__(self, key: str) -> bool:
        return key in self._singletons

    def get(self, key: str) -> Any:
        try:
            return self._singletons[key]
        except KeyError:
            raise KeyError(f"No service registered for key '{key}'") from None
