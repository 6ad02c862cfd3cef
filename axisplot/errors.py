from __future__ import annotations


class PlotError(Exception):
    """Base class for axisplot errors."""


class ConstructionError(PlotError, ValueError):
    """Raised when a model value cannot be built from the given configuration."""


class InvalidRangeError(ConstructionError):
    pass


class InvalidGridError(ConstructionError):
    pass


class PlotDataError(PlotError, ValueError):
    pass


class RenderContextError(PlotError, RuntimeError):
    pass


class LayoutError(PlotError, ValueError):
    pass
