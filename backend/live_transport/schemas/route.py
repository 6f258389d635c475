from pydantic import BaseModel

from live_transport.core.categories import Category


class StopDefinition(BaseModel):
    name: str
    point_index: int


class RouteDefinition(BaseModel):
    id: str
    category: Category
    points: list[tuple[float, float]]  # [(lat, lon), ...]
    color: str = "#e11d48"
    origin: str = ""
    destination: str = ""
    stops: list[StopDefinition] = []


class RouteInfo(BaseModel):
    id: str
    category: str
    color: str
    origin: str
    destination: str
    geometry: list[list[float]]  # [[lat, lon], ...]


class RouteStopInfo(BaseModel):
    name: str
    lat: float
    lon: float
    order: int


class RouteDetail(RouteInfo):
    segment_count: int
    length_m: float
    stops: list[RouteStopInfo] = []
