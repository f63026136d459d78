"""
Main window for the route replay viewer.
"""
import logging

from PyQt5 import QtCore
from PyQt5.QtWidgets import (
    QComboBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from replay.camera import CameraMode
from replay.coordinator import TimelineCoordinator
from ui.canvases import ReplayMapCanvas
from ui.styles import DARK_STYLESHEET

logger = logging.getLogger(__name__)

SPEED_CHOICES = [0.5, 1, 2, 4, 8, 16]


def format_ms(ms: float) -> str:
    """Format milliseconds as m:ss.s"""
    seconds = max(0.0, ms) / 1000
    minutes = int(seconds // 60)
    return f"{minutes}:{seconds % 60:04.1f}"


class ReplayWindow(QMainWindow):
    """
    Desktop wrapper around a TimelineCoordinator.

    Displays:
    - Route map with one marker and path per track
    - Play / pause / stop buttons and a seek slider
    - Speed and camera mode selectors
    - Per-track progress
    """

    def __init__(self):
        super().__init__()

        self.setWindowTitle("Route Replay")
        self.resize(1200, 800)

        self.coordinator = None
        self._slider_dragging = False
        self.progress_labels = {}

        central = QWidget()
        self.setCentralWidget(central)

        root_layout = QHBoxLayout()
        root_layout.setContentsMargins(8, 8, 8, 8)
        root_layout.setSpacing(10)
        central.setLayout(root_layout)

        root_layout.addLayout(self._build_map_column(), 4)
        root_layout.addLayout(self._build_side_column(), 1)

        self.setStyleSheet(DARK_STYLESHEET)

    def _build_map_column(self):
        """Build left column: map canvas + transport controls."""
        col = QVBoxLayout()
        col.setSpacing(6)

        self.map_canvas = ReplayMapCanvas(self)
        col.addWidget(self.map_canvas, 1)

        controls = QHBoxLayout()
        self.play_btn = QPushButton("▶ Play")
        self.pause_btn = QPushButton("⏸ Pause")
        self.stop_btn = QPushButton("⏹ Stop")
        for btn in (self.play_btn, self.pause_btn, self.stop_btn):
            btn.setFixedHeight(28)
            controls.addWidget(btn)

        self.seek_slider = QSlider(QtCore.Qt.Horizontal)
        self.seek_slider.setRange(0, 0)
        controls.addWidget(self.seek_slider, 1)

        self.time_label = QLabel("0:00.0 / 0:00.0")
        controls.addWidget(self.time_label)

        col.addLayout(controls)
        return col

    def _build_side_column(self):
        """Build right column: playback settings + track progress."""
        col = QVBoxLayout()
        col.setSpacing(10)

        settings_group = QGroupBox("Playback")
        settings_layout = QVBoxLayout()
        settings_group.setLayout(settings_layout)

        settings_layout.addWidget(QLabel("Speed"))
        self.speed_combo = QComboBox()
        for speed in SPEED_CHOICES:
            self.speed_combo.addItem(f"{speed}x", speed)
        self.speed_combo.setCurrentIndex(SPEED_CHOICES.index(1))
        settings_layout.addWidget(self.speed_combo)

        settings_layout.addWidget(QLabel("Camera"))
        self.camera_combo = QComboBox()
        for mode in CameraMode:
            self.camera_combo.addItem(mode.value, mode)
        settings_layout.addWidget(self.camera_combo)

        self.status_label = QLabel("Status: ⏸️ WAITING")
        settings_layout.addWidget(self.status_label)

        self.tracks_group = QGroupBox("Tracks")
        self.tracks_layout = QVBoxLayout()
        self.tracks_layout.setSpacing(2)
        self.tracks_group.setLayout(self.tracks_layout)

        col.addWidget(settings_group)
        col.addWidget(self.tracks_group)
        col.addStretch()
        return col

    # ==========================================================================
    # Coordinator wiring
    # ==========================================================================

    def attach(self, coordinator: TimelineCoordinator):
        """
        Connect controls and event signals to a coordinator.

        Args:
            coordinator: Coordinator rendering onto ``self.map_canvas``
        """
        self.coordinator = coordinator

        self.play_btn.clicked.connect(coordinator.play)
        self.pause_btn.clicked.connect(coordinator.pause)
        self.stop_btn.clicked.connect(coordinator.stop)

        self.seek_slider.sliderPressed.connect(self._on_slider_pressed)
        self.seek_slider.sliderReleased.connect(self._on_slider_released)
        self.speed_combo.currentIndexChanged.connect(self._on_speed_changed)
        self.camera_combo.currentIndexChanged.connect(self._on_camera_changed)

        self.camera_combo.setCurrentIndex(list(CameraMode).index(coordinator.camera_mode))
        speed = coordinator.state.speed_multiplier
        if speed in SPEED_CHOICES:
            self.speed_combo.setCurrentIndex(SPEED_CHOICES.index(speed))

        events = coordinator.events
        events.started.connect(lambda _e: self.status_label.setText("Status: ▶️ PLAYING"))
        events.paused.connect(lambda _e: self.status_label.setText("Status: ⏸️ PAUSED"))
        events.finished.connect(lambda _e: self.status_label.setText("Status: 🏁 FINISHED"))
        events.error.connect(self.handle_error)
        events.seeked.connect(self.handle_seek)
        events.frame.connect(self.handle_frame)

        self._rebuild_track_labels()
        self.handle_seek(None)

    def _rebuild_track_labels(self):
        for label in self.progress_labels.values():
            self.tracks_layout.removeWidget(label)
            label.deleteLater()
        self.progress_labels = {}
        for track_id in self.coordinator.track_ids:
            label = QLabel(f"{track_id}: 0%")
            self.tracks_layout.addWidget(label)
            self.progress_labels[track_id] = label

    def _update_time(self):
        current = self.coordinator.current_time_ms
        duration = self.coordinator.get_duration_ms()
        self.time_label.setText(f"{format_ms(current)} / {format_ms(duration)}")
        if not self._slider_dragging:
            self.seek_slider.blockSignals(True)
            self.seek_slider.setRange(0, int(duration))
            self.seek_slider.setValue(int(current))
            self.seek_slider.blockSignals(False)

    # ==========================================================================
    # Event handlers
    # ==========================================================================

    def handle_seek(self, _event):
        if set(self.progress_labels) != set(self.coordinator.track_ids):
            self._rebuild_track_labels()
        self._update_time()

    def handle_frame(self, event):
        label = self.progress_labels.get(event.track_id)
        if label is not None:
            label.setText(f"{event.track_id}: {event.progress * 100:.0f}%")
        self._update_time()

    def handle_error(self, event):
        logger.error(f"Replay error: {event.error}")
        self.status_label.setText(f"Status: ❌ {event.error}")

    def _on_slider_pressed(self):
        self._slider_dragging = True

    def _on_slider_released(self):
        self._slider_dragging = False
        self.coordinator.seek(self.seek_slider.value())

    def _on_speed_changed(self, index):
        self.coordinator.set_speed(self.speed_combo.itemData(index))

    def _on_camera_changed(self, index):
        self.coordinator.set_camera_mode(self.camera_combo.itemData(index))
