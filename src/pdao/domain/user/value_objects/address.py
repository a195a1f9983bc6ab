"""Embedded address value object."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any

from pdao_contracts import DEFAULT_COUNTRY, AddressType


@dataclass(frozen=True)
class Coordinates:
    lat: float | None = None
    lng: float | None = None


@dataclass(frozen=True)
class Address:
    """A Philippine postal address, stored embedded in the user record.

    Locality fields hold names (not reference-data codes), exactly as the
    address selector emits them.
    """

    street: str
    barangay: str
    city_municipality: str
    province: str
    region: str
    zip_code: str = ""
    country: str = DEFAULT_COUNTRY
    type: AddressType = AddressType.PERMANENT
    coordinates: Coordinates | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Address:
        coordinates = data.get("coordinates")
        return cls(
            street=data["street"],
            barangay=data["barangay"],
            city_municipality=data["city_municipality"],
            province=data["province"],
            region=data["region"],
            zip_code=data.get("zip_code") or "",
            country=data.get("country") or DEFAULT_COUNTRY,
            type=AddressType(data.get("type") or AddressType.PERMANENT),
            coordinates=Coordinates(**coordinates) if coordinates else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation used by the storage layer."""
        data = asdict(self)
        data["type"] = self.type.value
        return data

    def merged(self, changes: dict[str, Any]) -> Address:
        """Copy with the given fields replaced; None values are ignored."""
        updates = {key: value for key, value in changes.items() if value is not None}
        if "type" in updates:
            updates["type"] = AddressType(updates["type"])
        if "coordinates" in updates and isinstance(updates["coordinates"], dict):
            updates["coordinates"] = Coordinates(**updates["coordinates"])
        return replace(self, **updates)
