"""Philippine geography reference data for the address selector.

Each level is looked up by the code of its parent; an unknown code yields
an empty list.
"""

from fastapi import APIRouter

from pdao.presentation.api.dependencies import GeographyDep
from pdao.presentation.api.schemas import GeoOptionResponse

router = APIRouter()


@router.get("/regions", summary="List regions")
async def list_regions(geography: GeographyDep) -> list[GeoOptionResponse]:
    return [
        GeoOptionResponse(code=item.code, name=item.name)
        for item in geography.regions()
    ]


@router.get("/regions/{region_code}/provinces", summary="List provinces of a region")
async def list_provinces(
    region_code: str,
    geography: GeographyDep,
) -> list[GeoOptionResponse]:
    return [
        GeoOptionResponse(code=item.code, name=item.name)
        for item in geography.provinces(region_code)
    ]


@router.get(
    "/provinces/{province_code}/cities",
    summary="List cities and municipalities of a province",
)
async def list_cities(
    province_code: str,
    geography: GeographyDep,
) -> list[GeoOptionResponse]:
    return [
        GeoOptionResponse(code=item.code, name=item.name)
        for item in geography.cities(province_code)
    ]


@router.get("/cities/{city_code}/barangays", summary="List barangays of a city")
async def list_barangays(
    city_code: str,
    geography: GeographyDep,
) -> list[GeoOptionResponse]:
    return [
        GeoOptionResponse(code=item.code, name=item.name)
        for item in geography.barangays(city_code)
    ]
