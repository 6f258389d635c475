from pydantic import BaseModel, Field, model_validator

from live_transport.core.categories import Category


class BoundingBox(BaseModel):
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @model_validator(mode="after")
    def _check_order(self) -> "BoundingBox":
        if self.min_lat > self.max_lat or self.min_lon > self.max_lon:
            raise ValueError("bounding box minimum exceeds maximum")
        return self


class CategoryFleet(BaseModel):
    category: Category
    count: int = Field(ge=0)
    route_ids: list[str] = []  # route-bound categories only
    bounds: BoundingBox | None = None  # free-roaming override
    speed_min: float = Field(0.0, ge=0.0, lt=1.0)
    speed_max: float = Field(0.0, ge=0.0, lt=1.0)
    capacity: int | None = None

    @model_validator(mode="after")
    def _check_speed_range(self) -> "CategoryFleet":
        if self.speed_min > self.speed_max:
            raise ValueError("speed_min must not exceed speed_max")
        return self


class FleetConfig(BaseModel):
    bounds: BoundingBox
    categories: list[CategoryFleet]
