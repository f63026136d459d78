"""
Matplotlib canvas widgets for route replay visualization.
"""
from ui.canvases.track_map import ReplayMapCanvas

__all__ = ['ReplayMapCanvas']
