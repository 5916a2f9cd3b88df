from __future__ import annotations

from dataclasses import dataclass
from typing import Any

BACKEND_REDIS = "redis"
BACKEND_MEMORY = "memory"


@dataclass(slots=True)
class StoreConfig:
    """Connection information for the document store."""

    backend: str = BACKEND_REDIS
    url: str | None = None
    namespace: str = "codenotes"
    socket_timeout: float | None = None

    def client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.socket_timeout is not None:
            kwargs["socket_timeout"] = self.socket_timeout
        return kwargs


__all__ = ["BACKEND_MEMORY", "BACKEND_REDIS", "StoreConfig"]
