from axisplot.axes import AxesContext, AxesModel, AxesSnapshot
from axisplot.config import RenderConfig
from axisplot.drawables import Drawable, FrameRect, GridLine, Marker, Segment
from axisplot.errors import (
    ConstructionError,
    InvalidGridError,
    InvalidRangeError,
    LayoutError,
    PlotDataError,
    PlotError,
    RenderContextError,
)
from axisplot.figure import AxesBuilder, FigureModel, PlotModel
from axisplot.geometry import AxesBounds, AxisRange, Point2, Rect, ScreenPoint, point2
from axisplot.grid import GridModel
from axisplot.layout import GridLayout
from axisplot.render import AxesFrame, FigureFrame, PlotFrame, render_figure
from axisplot.scales import AxesTransform
from axisplot.series import FunctionCurve, GeometryAxes, Line, Points
from axisplot.style import LineStyle, MarkerStyle
from axisplot.sync import RWLock, Shared
from axisplot.view import FigureView, FrameRequest, FrameScheduler

__all__ = [
    "AxesBounds",
    "AxesBuilder",
    "AxesContext",
    "AxesFrame",
    "AxesModel",
    "AxesSnapshot",
    "AxesTransform",
    "AxisRange",
    "ConstructionError",
    "Drawable",
    "FigureFrame",
    "FigureModel",
    "FigureView",
    "FrameRect",
    "FrameRequest",
    "FrameScheduler",
    "FunctionCurve",
    "GeometryAxes",
    "GridLayout",
    "GridLine",
    "GridModel",
    "InvalidGridError",
    "InvalidRangeError",
    "LayoutError",
    "Line",
    "LineStyle",
    "Marker",
    "MarkerStyle",
    "PlotDataError",
    "PlotError",
    "PlotFrame",
    "PlotModel",
    "Point2",
    "Points",
    "RWLock",
    "Rect",
    "RenderConfig",
    "RenderContextError",
    "ScreenPoint",
    "Segment",
    "Shared",
    "point2",
    "render_figure",
]
