"""Reference-data responses for the address selector."""

from pydantic import BaseModel


class GeoOptionResponse(BaseModel):
    code: str
    name: str
