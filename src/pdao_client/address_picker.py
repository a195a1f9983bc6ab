"""Cascading region → province → city → barangay selector.

The picker is a plain state object: a UI renders ``level``,
``filtered_options()``, ``breadcrumb()`` and ``error`` and forwards the
user's taps to ``select``, ``go_back`` and ``jump_to``.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Protocol

from pdao_geo import GeoItem, GeoLevel, PhilippineGeography, get_geography

from pdao_client.api_client import PDAOApiClient

logger = logging.getLogger(__name__)

LEVELS: tuple[GeoLevel, ...] = (
    GeoLevel.REGION,
    GeoLevel.PROVINCE,
    GeoLevel.CITY,
    GeoLevel.BARANGAY,
)

LOAD_ERROR_MESSAGES = {
    GeoLevel.REGION: "Failed to load regions. Please try again.",
    GeoLevel.PROVINCE: "Failed to load provinces. Please try again.",
    GeoLevel.CITY: "Failed to load cities. Please try again.",
    GeoLevel.BARANGAY: "Failed to load barangays. Please try again.",
}

SelectedAddress = dict[str, str]


class AddressSource(Protocol):
    """Where the picker gets its options from."""

    async def regions(self) -> list[GeoItem]: ...

    async def provinces(self, region_code: str) -> list[GeoItem]: ...

    async def cities(self, province_code: str) -> list[GeoItem]: ...

    async def barangays(self, city_code: str) -> list[GeoItem]: ...


class StaticAddressSource:
    """Serves options from the dataset bundled with ``pdao_geo``."""

    def __init__(self, geography: PhilippineGeography | None = None):
        self._geography = geography or get_geography()

    async def regions(self) -> list[GeoItem]:
        return self._geography.regions()

    async def provinces(self, region_code: str) -> list[GeoItem]:
        return self._geography.provinces(region_code)

    async def cities(self, province_code: str) -> list[GeoItem]:
        return self._geography.cities(province_code)

    async def barangays(self, city_code: str) -> list[GeoItem]:
        return self._geography.barangays(city_code)


class HttpAddressSource:
    """Serves options from the API's ``/api/address`` endpoints."""

    def __init__(self, client: PDAOApiClient):
        self._client = client

    async def regions(self) -> list[GeoItem]:
        return await self._client.regions()

    async def provinces(self, region_code: str) -> list[GeoItem]:
        return await self._client.provinces(region_code)

    async def cities(self, province_code: str) -> list[GeoItem]:
        return await self._client.cities(province_code)

    async def barangays(self, city_code: str) -> list[GeoItem]:
        return await self._client.barangays(city_code)


class AddressPicker:
    """
    State machine behind the address selector.

    Selecting at one level clears every level below it (selections and
    option lists) and fetches the options of the next level. Each fetch
    carries a per-level token; a response arriving after a newer fetch for
    the same level was started, or after that level was cleared, is
    dropped. Fetch failures never raise, they set ``error``.

    Parameters
    ----------
    source
        Option provider (static dataset or HTTP)
    on_select
        Called with ``{region, province, city, barangay}`` names once a
        barangay is chosen
    on_close
        Called whenever the picker closes
    """

    def __init__(
        self,
        source: AddressSource,
        on_select: Callable[[SelectedAddress], None] | None = None,
        on_close: Callable[[], None] | None = None,
    ):
        self._source = source
        self._on_select = on_select
        self._on_close = on_close
        self.visible = False
        self.level = GeoLevel.REGION
        self.search_query = ""
        self.is_loading = False
        self.error: str | None = None
        self._selected: dict[GeoLevel, GeoItem | None] = dict.fromkeys(LEVELS)
        self._options: dict[GeoLevel, list[GeoItem]] = {level: [] for level in LEVELS}
        self._tokens: dict[GeoLevel, int] = dict.fromkeys(LEVELS, 0)

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    def selected(self, level: GeoLevel) -> GeoItem | None:
        return self._selected[level]

    def options(self, level: GeoLevel | None = None) -> list[GeoItem]:
        return list(self._options[level or self.level])

    def filtered_options(self) -> list[GeoItem]:
        """Options of the current level matching the search query."""
        options = self._options[self.level]
        if not self.search_query.strip():
            return list(options)
        return [item for item in options if item.matches(self.search_query)]

    def breadcrumb(self) -> list[GeoLevel]:
        """Levels the user may jump to: the region plus every level whose parent is chosen."""
        reachable = [GeoLevel.REGION]
        for parent, child in zip(LEVELS, LEVELS[1:]):
            if self._selected[parent] is None:
                break
            reachable.append(child)
        return reachable

    def preview(self) -> str:
        """Chosen names so far, narrowest first."""
        names = [item.name for item in reversed(self._selected.values()) if item]
        return ", ".join(names)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    async def open(self, initial_address: SelectedAddress | None = None) -> None:
        """Show the picker, loading regions if they are not loaded yet.

        With ``initial_address`` the region whose name matches
        (case-insensitively) is preselected.
        """
        self.visible = True
        if not self._options[GeoLevel.REGION]:
            await self._load(GeoLevel.REGION, None)

        region_name = (initial_address or {}).get("region", "").strip().lower()
        if region_name:
            for region in self._options[GeoLevel.REGION]:
                if region.name.lower() == region_name:
                    self.level = GeoLevel.REGION
                    await self.select(region)
                    break

    def close(self) -> None:
        self.visible = False
        if self._on_close is not None:
            self._on_close()

    def set_search_query(self, query: str) -> None:
        self.search_query = query

    async def select(self, item: GeoItem) -> None:
        """Choose ``item`` at the current level."""
        level = self.level
        self._selected[level] = item
        self._clear_below(level)
        self.search_query = ""

        if level is GeoLevel.BARANGAY:
            self._emit()
            self.close()
            return

        next_level = LEVELS[LEVELS.index(level) + 1]
        self.level = next_level
        await self._load(next_level, item.code)

    def go_back(self) -> None:
        """Step one level up; options already loaded are kept."""
        index = LEVELS.index(self.level)
        if index > 0:
            self.level = LEVELS[index - 1]
            self.search_query = ""

    def jump_to(self, level: GeoLevel) -> None:
        """Return to a level already reached through the breadcrumb."""
        if level not in self.breadcrumb():
            msg = f"Level {level.value} has not been reached yet"
            raise ValueError(msg)
        self.level = level
        self.search_query = ""

    def reset(self) -> None:
        """Forget every selection; regions stay loaded."""
        self._selected[GeoLevel.REGION] = None
        self._clear_below(GeoLevel.REGION)
        self.level = GeoLevel.REGION
        self.search_query = ""
        self.error = None
        self.is_loading = False

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _clear_below(self, level: GeoLevel) -> None:
        for lower in LEVELS[LEVELS.index(level) + 1 :]:
            self._selected[lower] = None
            self._options[lower] = []
            # Invalidates any fetch still in flight for this level
            self._tokens[lower] += 1

    def _fetcher(self, level: GeoLevel) -> Callable[..., Awaitable[list[GeoItem]]]:
        return {
            GeoLevel.REGION: self._source.regions,
            GeoLevel.PROVINCE: self._source.provinces,
            GeoLevel.CITY: self._source.cities,
            GeoLevel.BARANGAY: self._source.barangays,
        }[level]

    async def _load(self, level: GeoLevel, parent_code: str | None) -> None:
        self._tokens[level] += 1
        token = self._tokens[level]
        self.is_loading = True
        self.error = None

        fetch = self._fetcher(level)
        try:
            items = await (fetch() if parent_code is None else fetch(parent_code))
        except Exception as e:
            if token == self._tokens[level]:
                logger.warning("Loading %s options failed: %s", level.value, e)
                self.error = LOAD_ERROR_MESSAGES[level]
                self.is_loading = False
            return

        if token != self._tokens[level]:
            logger.debug("Dropping stale %s options for %s", level.value, parent_code)
            return
        self._options[level] = list(items)
        self.is_loading = False
        logger.debug("Loaded %d %s options", len(items), level.value)

    def _emit(self) -> None:
        address = {
            "region": self._selected[GeoLevel.REGION],
            "province": self._selected[GeoLevel.PROVINCE],
            "city": self._selected[GeoLevel.CITY],
            "barangay": self._selected[GeoLevel.BARANGAY],
        }
        if any(item is None for item in address.values()):
            return
        if self._on_select is not None:
            self._on_select({key: item.name for key, item in address.items()})
