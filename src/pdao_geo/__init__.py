"""PDAO Geo - Philippine administrative geography reference data.

Regions contain provinces, provinces contain cities/municipalities and
cities contain barangays. Each level is looked up by the code of its
parent:

    from pdao_geo import get_geography

    geo = get_geography()
    region = geo.find_region("Region I")
    provinces = geo.provinces(region.code)
"""

from pdao_geo.dataset import PhilippineGeography, get_geography
from pdao_geo.models import GeoItem, GeoLevel

__all__ = [
    "GeoItem",
    "GeoLevel",
    "PhilippineGeography",
    "get_geography",
]
