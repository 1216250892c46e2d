"""
Routing.

This module provides the route table modules contribute to.

Key features:
- Path templates with ``:param`` segments
- Default request parameters per route
- Ordered route table, first match wins
"""

from dataclasses import dataclass, field
from typing import Any


class RouteError(Exception):
    """Base exception for routing errors."""

    pass


@dataclass
class Route:
    """
    A path template mapped onto request parameters.

    Attributes:
        pattern: Path template, e.g. ``js/monitoring/:file``
        defaults: Parameters merged into every match (controller, action...)
    """

    pattern: str
    defaults: dict[str, Any] = field(default_factory=dict)

    @property
    def segments(self) -> list[str]:
        return [segment for segment in self.pattern.strip("/").split("/") if segment]

    def match(self, path: str) -> dict[str, Any] | None:
        """
        Match a request path against this route.

        Args:
            path: Request path

        Returns:
            Defaults merged with captured parameters, or None on mismatch
        """
        parts = [part for part in path.strip("/").split("/") if part]
        segments = self.segments
        if len(parts) != len(segments):
            return None

        params = dict(self.defaults)
        for segment, part in zip(segments, parts, strict=True):
            if segment.startswith(":"):
                params[segment[1:]] = part
            elif segment != part:
                return None
        return params

    def assemble(self, params: dict[str, Any]) -> str:
        """
        Build a path from parameters.

        Args:
            params: Values for the ``:param`` segments

        Returns:
            Assembled path

        Raises:
            RouteError: If a parameter is missing
        """
        parts = []
        for segment in self.segments:
            if segment.startswith(":"):
                name = segment[1:]
                if name not in params:
                    raise RouteError(f"Missing route parameter: {name}")
                parts.append(str(params[name]))
            else:
                parts.append(segment)
        return "/".join(parts)


class Router:
    """Ordered, named route table."""

    def __init__(self):
        self._routes: dict[str, Route] = {}

    def add_route(self, name: str, route: Route) -> "Router":
        """
        Add a route, replacing any route of the same name.

        Args:
            name: Route name
            route: Route instance

        Returns:
            self
        """
        self._routes[name] = route
        return self

    def has_route(self, name: str) -> bool:
        return name in self._routes

    def get_route(self, name: str) -> Route:
        """
        Get a route by name.

        Raises:
            RouteError: If no route of that name exists
        """
        if name not in self._routes:
            raise RouteError(f"Route not found: {name}")
        return self._routes[name]

    @property
    def routes(self) -> dict[str, Route]:
        return dict(self._routes)

    def match(self, path: str) -> tuple[str, dict[str, Any]] | None:
        """
        Find the first route matching *path*.

        Returns:
            Tuple of (route name, parameters), or None if nothing matches
        """
        for name, route in self._routes.items():
            params = route.match(path)
            if params is not None:
                return name, params
        return None
