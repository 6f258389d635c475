"""Vehicle categories and the per-category styling the map widget needs.

Each :class:`Category` maps to exactly one :class:`CategoryStyle`; the module
refuses to import if a category is left without one.
"""

from dataclasses import dataclass
from enum import Enum

MARKER_SIZE = 28
MARKER_HOVER_SIZE = 40


class Category(str, Enum):
    BUS = "Bus"
    TRAIN = "Train"
    CAB = "Cab"
    AUTO_RICKSHAW = "Auto-rickshaw"

    @classmethod
    def parse(cls, value: "str | Category") -> "Category | None":
        """Return the category for a label such as ``"Bus"``, or None if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class RouteStyle:
    color: str
    weight: int = 7
    opacity: float = 1.0
    visible: bool = True


HIDDEN_ROUTE_STYLE = RouteStyle(color="#000000", weight=0, opacity=0.0, visible=False)


@dataclass(frozen=True)
class MarkerStyle:
    icon: str  # inline SVG, already coloured
    size: int
    color: str
    category: str


@dataclass(frozen=True)
class CategoryStyle:
    label: str
    route_bound: bool
    palette: tuple[str, ...]
    icon_template: str  # SVG with a {color} placeholder
    route_style: RouteStyle
    id_prefix: str
    name_template: str  # formatted with n = 1-based index

    def color_for(self, index: int) -> str:
        return self.palette[index % len(self.palette)]

    def vehicle_name(self, index: int) -> str:
        return self.name_template.format(n=index + 1)

    def vehicle_id(self, index: int) -> str:
        return f"{self.id_prefix}_{index}"

    def marker_style(self, category: Category, color: str, hovered: bool = False) -> MarkerStyle:
        return MarkerStyle(
            icon=self.icon_template.format(color=color),
            size=MARKER_HOVER_SIZE if hovered else MARKER_SIZE,
            color=color,
            category=category.value,
        )


_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="{color}"><path d="%s"/></svg>'

STYLES: dict[Category, CategoryStyle] = {
    Category.BUS: CategoryStyle(
        label="Buses",
        route_bound=True,
        palette=("#3b82f6", "#16a34a", "#f97316", "#9333ea"),
        icon_template=_SVG % (
            "M18 2H6C4.9 2 4 2.9 4 4V18C4 19.1 4.9 20 6 20H18C19.1 20 20 19.1 20 18V4"
            "C20 2.9 19.1 2 18 2ZM12 4C13.1 4 14 4.9 14 6S13.1 8 12 8 10 7.1 10 6 10.9 4 12 4Z"
            "M18 16H6V14H18V16ZM18 12H6V10H18V12Z"
        ),
        route_style=RouteStyle(color="#e11d48"),
        id_prefix="bus",
        name_template="Bus {n}",
    ),
    Category.TRAIN: CategoryStyle(
        label="Trains",
        route_bound=True,
        palette=("#ef4444", "#d946ef"),
        icon_template=_SVG % (
            "M12 2C8.69 2 6 2.5 6 4V15H4V17H6V19H8V17H16V19H18V17H20V15H18V4C18 2.5 15.31 2 12 2Z"
            "M12 4C14.21 4 16 4.9 16 6H8C8 4.9 9.79 4 12 4Z"
        ),
        route_style=RouteStyle(color="#ef4444"),
        id_prefix="train",
        name_template="Train {n}",
    ),
    Category.CAB: CategoryStyle(
        label="Cabs",
        route_bound=False,
        palette=("#facc15", "#eab308"),
        icon_template=_SVG % (
            "M20.5 6H3.5C2.67 6 2 6.67 2 7.5V17.5C2 18.33 2.67 19 3.5 19H20.5C21.33 19 22 18.33 22 17.5"
            "V7.5C22 6.67 21.33 6 20.5 6ZM6.5 16C5.67 16 5 15.33 5 14.5S5.67 13 6.5 13 8 13.67 8 14.5"
            " 7.33 16 6.5 16ZM17.5 16C16.67 16 16 15.33 16 14.5S16.67 13 17.5 13 19 13.67 19 14.5"
            " 18.33 16 17.5 16Z"
        ),
        route_style=RouteStyle(color="#facc15"),
        id_prefix="cab",
        name_template="Cab #{n}",
    ),
    Category.AUTO_RICKSHAW: CategoryStyle(
        label="Auto-rickshaws",
        route_bound=False,
        palette=("#4ade80", "#22c55e"),
        icon_template=_SVG % (
            "M20 10H4V17H6V15H18V17H20V10ZM16 13H8V11H16V13Z M19.41 4.59L18 6.01V4H16V6.01L14.59 4.59"
            "L13.17 6L15.59 8.41L17 7V9H19V7L20.41 8.41L21.83 7L19.41 4.59Z"
        ),
        route_style=RouteStyle(color="#22c55e"),
        id_prefix="auto",
        name_template="Auto #{n}",
    ),
}

_missing = set(Category) - STYLES.keys()
if _missing:
    raise RuntimeError(f"Categories without a style: {sorted(c.value for c in _missing)}")


def style_for(category: Category) -> CategoryStyle:
    return STYLES[category]
