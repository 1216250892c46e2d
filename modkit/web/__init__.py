"""
modkit Web Integration - Routing and dispatch primitives used by modules.

This package contains:
- Route / Router: named route table
- FrontController: controller directories per module
"""

from modkit.web.controller import FrontController
from modkit.web.router import Route, RouteError, Router

__all__ = ["FrontController", "Route", "RouteError", "Router"]
