"""
Tests for routing and the front controller.
"""

from pathlib import Path

import pytest

from modkit.web import FrontController, Route, RouteError, Router


class TestRoute:
    """Test path templates."""

    def test_match_with_params(self):
        route = Route("js/monitoring/:file", {"controller": "static"})

        assert route.match("/js/monitoring/module.js") == {
            "controller": "static",
            "file": "module.js",
        }

    def test_mismatch(self):
        route = Route("js/monitoring/:file")

        assert route.match("js/graphs/module.js") is None
        assert route.match("js/monitoring") is None
        assert route.match("js/monitoring/a/b") is None

    def test_match_does_not_mutate_defaults(self):
        route = Route("img/:file", {"action": "img"})
        route.match("img/logo.png")

        assert route.defaults == {"action": "img"}

    def test_assemble(self):
        route = Route("img/monitoring/:file")

        assert route.assemble({"file": "logo.png"}) == "img/monitoring/logo.png"
        with pytest.raises(RouteError, match="Missing route parameter: file"):
            route.assemble({})


class TestRouter:
    """Test the route table."""

    def test_add_and_get(self):
        router = Router()
        route = Route("about")

        router.add_route("about", route)

        assert router.has_route("about")
        assert router.get_route("about") is route
        with pytest.raises(RouteError, match="Route not found"):
            router.get_route("missing")

    def test_first_match_wins(self):
        router = Router()
        router.add_route("specific", Route("js/graphs/module.js", {"kind": "specific"}))
        router.add_route("generic", Route("js/graphs/:file", {"kind": "generic"}))

        name, params = router.match("js/graphs/module.js")

        assert name == "specific"
        assert params == {"kind": "specific"}
        assert router.match("nothing/here") is None


class TestFrontController:
    """Test controller directory registration."""

    def test_controller_directories(self):
        front_controller = FrontController()

        front_controller.add_controller_directory(Path("/srv/graphs/controllers"), "graphs")

        assert front_controller.get_controller_directory("graphs") == Path("/srv/graphs/controllers")
        assert front_controller.get_controller_directory("monitoring") is None
        assert front_controller.get_controller_directories() == {
            "graphs": Path("/srv/graphs/controllers")
        }
        assert isinstance(front_controller.get_router(), Router)
