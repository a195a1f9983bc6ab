"""Reference data structures for Philippine administrative geography."""

from dataclasses import dataclass
from enum import Enum


class GeoLevel(str, Enum):
    """Administrative levels, from the widest to the narrowest."""

    REGION = "region"
    PROVINCE = "province"
    CITY = "city"
    BARANGAY = "barangay"


@dataclass(frozen=True)
class GeoItem:
    """One selectable place.

    Attributes
    ----------
    code
        10-digit PSGC code
    name
        Display name, which is what ends up stored on an address
    parent_code
        Code of the containing place (None for regions)
    """

    code: str
    name: str
    parent_code: str | None = None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on the name."""
        return query.strip().lower() in self.name.lower()
