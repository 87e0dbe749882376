from bestfit.view.renderers.base import DragFilter, DragToAdd, Renderer
from bestfit.view.renderers.plot import PlotRenderer
from bestfit.view.renderers.raster import RasterRenderer
from bestfit.view.renderers.scene import SceneRenderer

__all__ = [
    "DragFilter",
    "DragToAdd",
    "PlotRenderer",
    "RasterRenderer",
    "Renderer",
    "SceneRenderer",
]
