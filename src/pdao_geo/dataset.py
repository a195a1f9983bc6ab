"""Bundled Philippine geography dataset.

The dataset ships as ``data/ph_address.json`` and is read once per
process. It holds the nationwide PSGC tables keyed by 10-digit PSGC codes.
Independent cities appear at province level as PSGC lists them, and the
City of Manila carries the barangays of its sub-municipal districts.

Lookups are keyed by the parent's code; an unknown code yields an empty
list rather than an error, matching how the selector treats a place with
no children.
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from functools import lru_cache
from importlib import resources
from typing import Any

from pdao_geo.models import GeoItem

logger = logging.getLogger(__name__)

_DATA_PACKAGE = "pdao_geo.data"
_DATA_FILE = "ph_address.json"


class PhilippineGeography:
    """Read-only index over regions, provinces, cities and barangays."""

    def __init__(self, data: dict[str, list[dict[str, Any]]]):
        self._regions = [
            GeoItem(code=row["code"], name=row["name"]) for row in data["regions"]
        ]
        self._provinces = self._index(data["provinces"], "region_code")
        self._cities = self._index(data["cities"], "province_code")
        self._barangays = self._index(data["barangays"], "city_code")

    @classmethod
    def load(cls) -> PhilippineGeography:
        """Load the dataset bundled with the package."""
        text = resources.files(_DATA_PACKAGE).joinpath(_DATA_FILE).read_text(
            encoding="utf-8",
        )
        geography = cls(json.loads(text))
        logger.debug("Loaded %d regions from %s", len(geography._regions), _DATA_FILE)
        return geography

    @staticmethod
    def _index(
        rows: list[dict[str, Any]],
        parent_key: str,
    ) -> dict[str, list[GeoItem]]:
        index: dict[str, list[GeoItem]] = defaultdict(list)
        for row in rows:
            parent = row[parent_key]
            index[parent].append(
                GeoItem(code=row["code"], name=row["name"], parent_code=parent),
            )
        return dict(index)

    def regions(self) -> list[GeoItem]:
        return list(self._regions)

    def provinces(self, region_code: str) -> list[GeoItem]:
        return list(self._provinces.get(region_code, []))

    def cities(self, province_code: str) -> list[GeoItem]:
        return list(self._cities.get(province_code, []))

    def barangays(self, city_code: str) -> list[GeoItem]:
        return list(self._barangays.get(city_code, []))

    def find_region(self, name: str) -> GeoItem | None:
        """Find a region by case-insensitive exact name."""
        wanted = name.strip().lower()
        for region in self._regions:
            if region.name.lower() == wanted:
                return region
        return None


@lru_cache
def get_geography() -> PhilippineGeography:
    """Process-wide bundled dataset."""
    return PhilippineGeography.load()
