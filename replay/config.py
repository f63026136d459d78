"""
Runtime configuration read from environment variables.

main.py loads a .env file (python-dotenv) before building the config, so
any of these can live there:

    REPLAY_FPS            30 or 60             (default 60)
    REPLAY_INITIAL_SPEED  speed multiplier > 0 (default 1.0)
    REPLAY_CAMERA_MODE    none|center|ahead    (default center)
    REPLAY_SHOW_PATHS     true/false           (default true)
    REPLAY_AUTO_FIT       true/false           (default true)
    REPLAY_LOG_LEVEL      logging level name   (default INFO)
"""
import logging
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from replay.camera import CameraMode
from replay.errors import ConfigurationError

SUPPORTED_FPS = (30, 60)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass
class ReplayConfig:
    fps: int = 60
    initial_speed: float = 1.0
    camera_mode: CameraMode = CameraMode.CENTER
    show_paths: bool = True
    auto_fit: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        if self.fps not in SUPPORTED_FPS:
            raise ConfigurationError(f"fps must be one of {SUPPORTED_FPS}, got {self.fps}")
        if not math.isfinite(self.initial_speed) or self.initial_speed <= 0:
            raise ConfigurationError(f"initial speed must be positive, got {self.initial_speed}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(f"Unknown log level {self.log_level!r}")
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ReplayConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: If a variable is set to an invalid value
        """
        env = os.environ if environ is None else environ

        try:
            fps = int(env.get("REPLAY_FPS", "60"))
        except ValueError as e:
            raise ConfigurationError(f"REPLAY_FPS must be an integer: {e}") from e

        try:
            speed = float(env.get("REPLAY_INITIAL_SPEED", "1.0"))
        except ValueError as e:
            raise ConfigurationError(f"REPLAY_INITIAL_SPEED must be a number: {e}") from e

        mode_name = env.get("REPLAY_CAMERA_MODE", CameraMode.CENTER.value).strip().lower()
        try:
            camera_mode = CameraMode(mode_name)
        except ValueError as e:
            raise ConfigurationError(f"Unknown REPLAY_CAMERA_MODE {mode_name!r}") from e

        return cls(
            fps=fps,
            initial_speed=speed,
            camera_mode=camera_mode,
            show_paths=_parse_bool("REPLAY_SHOW_PATHS", env.get("REPLAY_SHOW_PATHS", "true")),
            auto_fit=_parse_bool("REPLAY_AUTO_FIT", env.get("REPLAY_AUTO_FIT", "true")),
            log_level=env.get("REPLAY_LOG_LEVEL", "INFO"),
        )
