"""Lokasyon kayıt kaynakları.

Transfer analizi sabit bir depo listesi yerine enjekte edilen bir
registry'den lokasyonları okur.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from stock_insight.models.inventory import Location, Product, Sale

# Örnek mağaza/depo kimlikleri
DEFAULT_LOCATIONS: list[Location] = [
    Location("warehouse-a", "Warehouse A"),
    Location("store-downtown", "Downtown Store"),
    Location("north-branch", "North Branch"),
    Location("city-center-store", "City Center Store"),
]


class LocationRegistry(ABC):
    @abstractmethod
    def list_locations(self) -> list[Location]:
        ...

    def location_ids(self) -> list[str]:
        return [loc.location_id for loc in self.list_locations()]


class StaticLocationRegistry(LocationRegistry):
    """Sabit bir lokasyon listesi üzerinden çalışan registry."""

    def __init__(self, locations: Optional[Iterable[Location | str]] = None):
        source = DEFAULT_LOCATIONS if locations is None else locations
        self._locations: list[Location] = [
            loc if isinstance(loc, Location) else Location(loc) for loc in source
        ]
        ids = [loc.location_id for loc in self._locations]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Tekrarlanan lokasyon kimliği: {ids}")

    def list_locations(self) -> list[Location]:
        return list(self._locations)


class SnapshotLocationRegistry(LocationRegistry):
    """Lokasyonları ürün stok haritaları ve satış kayıtlarından türetir."""

    def __init__(self, products: Iterable[Product], sales: Iterable[Sale] = ()):
        ids: set[str] = set()
        for p in products:
            ids.update(p.stock.keys())
        for s in sales:
            if s.location_id:
                ids.add(s.location_id)
        self._locations = [Location(loc_id) for loc_id in sorted(ids)]

    def list_locations(self) -> list[Location]:
        return list(self._locations)
