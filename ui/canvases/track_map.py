"""
Route map canvas: draws replay markers and travelled paths with matplotlib.
"""
from typing import Dict, Optional

import numpy as np
from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.markers import MarkerStyle

from ui.styles import BG_COLOR, BG_COLOR_LIGHT, GRID_COLOR, TEXT_COLOR_DIM, TRACK_COLORS


class ReplayMapCanvas(FigureCanvas):
    """
    Matplotlib canvas acting as both renderer and camera for a replay.

    Longitude is drawn on the X axis and latitude on the Y axis. Each track
    gets a heading-rotated triangle marker and a path line in its own color.
    """

    def __init__(self, parent=None, width=6, height=6, dpi=100):
        """
        Initialize route map canvas.

        Args:
            parent: Parent QWidget
            width: Figure width in inches
            height: Figure height in inches
            dpi: Dots per inch resolution
        """
        self.fig = Figure(figsize=(width, height), dpi=dpi)
        self.ax = self.fig.add_subplot(111)
        super().__init__(self.fig)
        self.setParent(parent)

        self.fig.patch.set_facecolor(BG_COLOR)
        self.ax.set_facecolor(BG_COLOR_LIGHT)

        for spine in self.ax.spines.values():
            spine.set_color(TEXT_COLOR_DIM)
        self.ax.tick_params(colors=TEXT_COLOR_DIM, labelsize=7)
        self.ax.xaxis.label.set_color(TEXT_COLOR_DIM)
        self.ax.yaxis.label.set_color(TEXT_COLOR_DIM)
        self.ax.title.set_color("#FFFFFF")

        self.ax.set_aspect("equal", adjustable="datalim")
        self.ax.set_title("Route Replay", fontsize=10)
        self.ax.set_xlabel("Longitude [°]", fontsize=8)
        self.ax.set_ylabel("Latitude [°]", fontsize=8)
        self.ax.grid(True, color=GRID_COLOR, alpha=0.6)

        self.markers: Dict[str, Line2D] = {}
        self.paths: Dict[str, Line2D] = {}
        self._path_points: Dict[str, list] = {}
        self._colors: Dict[str, str] = {}

        self.fig.tight_layout(pad=1.0)

    def _color_for(self, track_id: str) -> str:
        if track_id not in self._colors:
            self._colors[track_id] = TRACK_COLORS[len(self._colors) % len(TRACK_COLORS)]
        return self._colors[track_id]

    # ------------------ Markers ------------------ #

    def update_marker(self, track_id, position, heading: Optional[float] = None):
        if position is None:
            self.remove_marker(track_id)
            return

        # Triangle pointing north, rotated clockwise by the heading
        marker_style = MarkerStyle((3, 0, -(heading or 0.0)))

        marker = self.markers.get(track_id)
        if marker is None:
            marker, = self.ax.plot(
                [position.lng], [position.lat],
                linestyle="none",
                marker=marker_style,
                markersize=11,
                color=self._color_for(track_id),
                markeredgecolor="#FFFFFF",
                zorder=3,
            )
            self.markers[track_id] = marker
        else:
            marker.set_data([position.lng], [position.lat])
            marker.set_marker(marker_style)
        self.draw_idle()

    def remove_marker(self, track_id):
        marker = self.markers.pop(track_id, None)
        if marker is not None:
            marker.remove()
            self.draw_idle()

    def remove_all_markers(self):
        for track_id in list(self.markers):
            self.remove_marker(track_id)

    # ------------------ Paths ------------------ #

    def _path_line(self, track_id) -> Line2D:
        line = self.paths.get(track_id)
        if line is None:
            line, = self.ax.plot(
                [], [], linewidth=2.5, alpha=0.8, color=self._color_for(track_id), zorder=2
            )
            self.paths[track_id] = line
        return line

    def _redraw_path(self, track_id):
        pts = np.array([(p.lng, p.lat) for p in self._path_points[track_id]], dtype=float)
        line = self._path_line(track_id)
        if pts.size == 0:
            line.set_data([], [])
        else:
            line.set_data(pts[:, 0], pts[:, 1])
        self.draw_idle()

    def add_path_point(self, track_id, position):
        self._path_points.setdefault(track_id, []).append(position)
        self._redraw_path(track_id)

    def set_path(self, track_id, points):
        self._path_points[track_id] = list(points)
        self._redraw_path(track_id)

    def reset_path(self, track_id):
        self._path_points[track_id] = []
        self._redraw_path(track_id)

    # ------------------ Camera ------------------ #

    def pan_to(self, position):
        """Recenter the view on ``position`` keeping the current span."""
        x0, x1 = self.ax.get_xlim()
        y0, y1 = self.ax.get_ylim()
        half_w = (x1 - x0) / 2
        half_h = (y1 - y0) / 2
        self.ax.set_xlim(position.lng - half_w, position.lng + half_w)
        self.ax.set_ylim(position.lat - half_h, position.lat + half_h)
        self.draw_idle()

    def move_camera(self, center, heading, tilt, zoom):
        """
        Center on ``center`` with a span derived from a web-map zoom level.

        A 2D axes cannot rotate or tilt, so heading and tilt only affect the
        marker, not the view.
        """
        half_span = 360.0 / (2 ** zoom) / 2
        self.ax.set_xlim(center.lng - half_span, center.lng + half_span)
        self.ax.set_ylim(center.lat - half_span, center.lat + half_span)
        self.draw_idle()

    def fit_bounds(self, bounds):
        """Fit the view to ``bounds`` with a 5% margin."""
        sw, ne = bounds.south_west, bounds.north_east
        pad_x = max((ne.lng - sw.lng) * 0.05, 1e-4)
        pad_y = max((ne.lat - sw.lat) * 0.05, 1e-4)
        self.ax.set_xlim(sw.lng - pad_x, ne.lng + pad_x)
        self.ax.set_ylim(sw.lat - pad_y, ne.lat + pad_y)
        self.draw_idle()
