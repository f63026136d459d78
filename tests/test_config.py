import pytest

from replay.camera import CameraMode
from replay.config import ReplayConfig
from replay.errors import ConfigurationError


def test_defaults():
    config = ReplayConfig.from_env({})
    assert config == ReplayConfig()
    assert config.fps == 60
    assert config.camera_mode is CameraMode.CENTER


def test_reads_environment():
    config = ReplayConfig.from_env({
        "REPLAY_FPS": "30",
        "REPLAY_INITIAL_SPEED": "2.5",
        "REPLAY_CAMERA_MODE": "Ahead",
        "REPLAY_SHOW_PATHS": "no",
        "REPLAY_AUTO_FIT": "0",
        "REPLAY_LOG_LEVEL": "debug",
    })
    assert config.fps == 30
    assert config.initial_speed == 2.5
    assert config.camera_mode is CameraMode.AHEAD
    assert config.show_paths is False
    assert config.auto_fit is False
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("env", [
    {"REPLAY_FPS": "45"},
    {"REPLAY_FPS": "fast"},
    {"REPLAY_INITIAL_SPEED": "0"},
    {"REPLAY_INITIAL_SPEED": "quick"},
    {"REPLAY_INITIAL_SPEED": "nan"},
    {"REPLAY_CAMERA_MODE": "orbit"},
    {"REPLAY_SHOW_PATHS": "maybe"},
    {"REPLAY_LOG_LEVEL": "LOUD"},
])
def test_invalid_values(env):
    with pytest.raises(ConfigurationError):
        ReplayConfig.from_env(env)
