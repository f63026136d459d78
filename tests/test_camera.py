import pytest

from replay.camera import CameraFollower, CameraMode, CameraOptions
from replay.model import InterpolatedPoint, LatLng
from tests.conftest import RecordingCamera


def point(heading=None):
    return InterpolatedPoint(1.0, 2.0, heading, 0.5)


def test_center_pans():
    camera = RecordingCamera()
    CameraFollower(camera).follow(point(10))
    assert camera.calls == [("pan_to", LatLng(1.0, 2.0))]


def test_ahead_moves_camera():
    camera = RecordingCamera()
    follower = CameraFollower(camera, CameraMode.AHEAD, CameraOptions(default_tilt=30, zoom_level=12))
    follower.follow(point(10))
    assert camera.calls == [("move_camera", LatLng(1.0, 2.0), 10, 30, 12)]


def test_ahead_without_heading_falls_back_to_pan():
    camera = RecordingCamera()
    follower = CameraFollower(camera, CameraMode.AHEAD)
    follower.follow(point())
    follower.follow(point())
    assert [c[0] for c in camera.calls] == ["pan_to", "pan_to"]


def test_none_mode_and_missing_camera():
    camera = RecordingCamera()
    CameraFollower(camera, CameraMode.NONE).follow(point(10))
    CameraFollower(None).follow(point(10))
    assert camera.calls == []


def test_set_mode_keeps_unspecified_options():
    follower = CameraFollower(RecordingCamera())
    follower.set_mode(CameraMode.AHEAD, zoom_level=18)
    assert follower.options == CameraOptions(zoom_level=18)
    follower.set_mode(CameraMode.AHEAD, default_tilt=10)
    assert follower.options == CameraOptions(default_tilt=10, zoom_level=18)


def test_options_only_cover_what_the_camera_uses():
    with pytest.raises(TypeError):
        CameraOptions(ahead_distance=100)
