# app/domain/ports.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from app.domain.models import Product


class CachePort(ABC):
    @abstractmethod
    async def get(self, key: str): ...
    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int = 43200): ...
    @abstractmethod
    async def get_raw(self, key: str) -> Optional[str]: ...


class CatalogPort(ABC):
    """Read-only view of the catalog blob. Never raises: failures mean an empty catalog."""
    @abstractmethod
    async def load(self) -> List[Product]: ...


class ProductSourcePort(ABC):
    """One third-party database. fetch() never raises: failures mean no results."""
    name: str = "source"

    @abstractmethod
    async def fetch(self, query: str) -> List[Product]: ...

    @property
    def configured(self) -> bool:
        return True
