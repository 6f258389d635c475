"""Construction-time errors for route tables and fleets."""


class TransportError(Exception):
    """Base class for errors that prevent a transport view from starting."""


class InvalidRoute(TransportError):
    """A route definition cannot be turned into a usable polyline."""

    def __init__(self, route_id: str, reason: str) -> None:
        super().__init__(f"Route {route_id!r}: {reason}")
        self.route_id = route_id
        self.reason = reason


class InvalidAssignment(TransportError):
    """Fleet configuration references routes that the route table lacks."""

    def __init__(self, category: str, reason: str) -> None:
        super().__init__(f"{category}: {reason}")
        self.category = category
        self.reason = reason
