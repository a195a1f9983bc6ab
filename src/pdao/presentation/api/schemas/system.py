from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    success: bool = True
    status: str = "ok"
    message: str
    database: Literal["connected", "disconnected"]


class RootResponse(BaseModel):
    success: bool = True
    message: str
    version: str
    endpoints: list[str]
