"""Per-category visibility filter driving marker add/remove deltas."""

import logging

from live_transport.core.categories import Category
from live_transport.core.fleet import Vehicle
from live_transport.core.markers import MarkerRegistry

logger = logging.getLogger(__name__)


class VisibilityFilter:
    """Category toggles for the filter panel.

    A change only touches markers of the toggled category; vehicles whose
    visibility is unchanged keep their marker (and its hover/click state).
    """

    def __init__(
        self,
        markers: MarkerRegistry,
        vehicles: list[Vehicle],
        visible: dict[Category, bool] | None = None,
    ) -> None:
        self._markers = markers
        self._by_category: dict[Category, list[str]] = {c: [] for c in Category}
        self._category_of: dict[str, Category] = {}
        for v in vehicles:
            self._by_category[v.category].append(v.id)
            self._category_of[v.id] = v.category
        self._visible = {c: True for c in Category}
        if visible:
            self._visible.update(visible)

    def attach(self) -> None:
        """Show markers for every currently visible vehicle."""
        for vehicle_id in self.visible_ids():
            self._markers.show(vehicle_id)

    def set_visible(self, category: Category | str, visible: bool) -> None:
        parsed = Category.parse(category)
        if parsed is None:
            logger.warning("Visibility change for unknown category %r ignored", category)
            return

        before = self.visible_ids()
        self._visible[parsed] = bool(visible)
        after = self.visible_ids()

        for vehicle_id in before - after:
            self._markers.hide(vehicle_id)
        for vehicle_id in after - before:
            self._markers.show(vehicle_id)

    def visible_ids(self) -> set[str]:
        return {
            vid
            for category, ids in self._by_category.items()
            if self._visible[category]
            for vid in ids
        }

    def is_visible(self, vehicle_id: str) -> bool:
        category = self._category_of.get(vehicle_id)
        return category is not None and self._visible[category]

    def visibility(self) -> dict[str, bool]:
        """Current toggle state keyed by category value."""
        return {c.value: self._visible[c] for c in Category}
