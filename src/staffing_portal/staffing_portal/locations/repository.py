from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AllowedLocation


class LocationRepository(Protocol):
    def list_all(self) -> Sequence[AllowedLocation]:
        raise NotImplementedError

    def list_active(self) -> Sequence[AllowedLocation]:
        """Active locations in stable id order (the matcher's tie-break order)."""

        raise NotImplementedError

    def get_by_id(self, location_id: int) -> Optional[AllowedLocation]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        address: str,
        latitude: float,
        longitude: float,
        radius: float,
        is_active: bool = True,
    ) -> int:
        raise NotImplementedError

    def update(self, location_id: int, *, fields: dict) -> bool:
        raise NotImplementedError

    def delete(self, location_id: int) -> bool:
        raise NotImplementedError
