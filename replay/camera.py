"""
Optional camera follow behaviour layered over the first track's position.
"""
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from replay.model import InterpolatedPoint

logger = logging.getLogger(__name__)


class CameraMode(Enum):
    NONE = "none"
    CENTER = "center"
    AHEAD = "ahead"


@dataclass(frozen=True)
class CameraOptions:
    default_tilt: float = 45        # degrees
    zoom_level: float = 15


class CameraFollower:
    """
    Moves a camera capability to follow an interpolated point.

    The camera must provide ``pan_to(position)`` and
    ``move_camera(center, heading, tilt, zoom)``.
    """

    def __init__(self, camera=None, mode: CameraMode = CameraMode.CENTER,
                 options: Optional[CameraOptions] = None):
        self.camera = camera
        self.mode = mode
        self.options = options or CameraOptions()
        self._warned_no_heading = False

    @property
    def enabled(self) -> bool:
        return self.camera is not None and self.mode is not CameraMode.NONE

    def set_mode(self, mode: CameraMode, **overrides) -> None:
        """
        Switch camera mode, optionally overriding individual options
        (default_tilt, zoom_level). Unspecified options keep
        their current values.
        """
        self.mode = mode
        if overrides:
            self.options = replace(self.options, **overrides)
        self._warned_no_heading = False
        logger.info(f"Camera mode set to {mode.value}")

    def follow(self, point: Optional[InterpolatedPoint]) -> None:
        if not self.enabled or point is None:
            return

        if self.mode is CameraMode.CENTER:
            self.camera.pan_to(point.position)
            return

        if point.heading is None:
            if not self._warned_no_heading:
                logger.warning("Camera 'ahead' mode requires heading data, falling back to center")
                self._warned_no_heading = True
            self.camera.pan_to(point.position)
            return

        self.camera.move_camera(
            center=point.position,
            heading=point.heading,
            tilt=self.options.default_tilt,
            zoom=self.options.zoom_level,
        )

    def fit_bounds(self, bounds) -> None:
        if self.camera is None or bounds is None:
            return
        fit = getattr(self.camera, "fit_bounds", None)
        if fit is not None:
            fit(bounds)
