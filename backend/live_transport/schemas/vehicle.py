from typing import Literal

from pydantic import BaseModel


class VehicleInfo(BaseModel):
    """Descriptive fields shown in the selection panel."""

    id: str
    name: str
    category: str
    color: str
    route_id: str | None = None
    speed_kmh: float | None = None
    eta_seconds: int | None = None
    capacity: int | None = None
    following: bool = False


class CategoryInfo(BaseModel):
    category: str
    label: str
    route_bound: bool
    palette: list[str]
    icon: str


class ClientCommand(BaseModel):
    action: Literal[
        "marker_click",
        "marker_hover",
        "set_visible",
        "toggle_follow",
        "clear_selection",
        "place_vehicle",
    ]
    id: str | None = None
    hovered: bool = False
    category: str | None = None
    visible: bool = True
    position: tuple[float, float] | None = None
