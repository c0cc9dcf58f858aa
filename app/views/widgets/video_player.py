"""Video player widget with basic controls."""

from __future__ import annotations

from PySide6.QtCore import Qt, QUrl
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QSlider,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from core.services.preview_policy import format_duration


class VideoPlayerWidget(QWidget):
    """Inline video preview with play/pause, seek and mute.

    Playback starts muted so flipping through a folder stays quiet.
    """

    def __init__(self, path: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        self._path = path
        self._duration = 0
        self._slider_dragging = False

        self._media_player = QMediaPlayer(self)
        self._audio_output = QAudioOutput(self)
        self._audio_output.setMuted(True)
        self._media_player.setAudioOutput(self._audio_output)
        self._video_widget = QVideoWidget(self)
        self._media_player.setVideoOutput(self._video_widget)

        self._media_player.durationChanged.connect(self._on_duration_changed)
        self._media_player.positionChanged.connect(self._on_position_changed)
        self._media_player.playbackStateChanged.connect(self._update_play_button)
        self._media_player.errorOccurred.connect(self._on_error)

        self._setup_ui()
        self._media_player.setSource(QUrl.fromLocalFile(path))

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._video_widget.setMinimumSize(200, 150)
        self._video_widget.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        layout.addWidget(self._video_widget)

        self._error_label = QLabel("Video file not found or cannot be played")
        self._error_label.setAlignment(Qt.AlignCenter)
        self._error_label.hide()
        layout.addWidget(self._error_label)

        controls = QHBoxLayout()

        self._play_button = QPushButton("▶")
        self._play_button.setFixedSize(30, 30)
        self._play_button.clicked.connect(self._toggle_playback)
        controls.addWidget(self._play_button)

        self._progress_slider = QSlider(Qt.Horizontal)
        self._progress_slider.setRange(0, 0)
        self._progress_slider.sliderPressed.connect(self._on_slider_pressed)
        self._progress_slider.sliderReleased.connect(self._on_slider_released)
        controls.addWidget(self._progress_slider)

        self._time_label = QLabel("--:-- / --:--")
        controls.addWidget(self._time_label)

        self._volume_button = QPushButton("🔇")
        self._volume_button.setFixedSize(30, 30)
        self._volume_button.clicked.connect(self._toggle_mute)
        controls.addWidget(self._volume_button)

        layout.addLayout(controls)

    def _toggle_playback(self) -> None:
        if self.is_playing():
            self._media_player.pause()
        else:
            self._media_player.play()

    def _toggle_mute(self) -> None:
        self._audio_output.setMuted(not self._audio_output.isMuted())
        self._volume_button.setText("🔇" if self._audio_output.isMuted() else "🔊")

    def _on_slider_pressed(self) -> None:
        self._slider_dragging = True

    def _on_slider_released(self) -> None:
        self._slider_dragging = False
        self._media_player.setPosition(self._progress_slider.value())

    def _update_play_button(self, *_: object) -> None:
        self._play_button.setText("⏸" if self.is_playing() else "▶")

    def _on_duration_changed(self, duration: int) -> None:
        self._duration = duration
        self._progress_slider.setRange(0, duration)
        self._update_time(self._media_player.position())

    def _on_position_changed(self, position: int) -> None:
        if not self._slider_dragging:
            self._progress_slider.setValue(position)
        self._update_time(position)

    def _on_error(self, error: QMediaPlayer.Error, message: str = "") -> None:
        if error == QMediaPlayer.Error.NoError:
            return
        logger.error("Video playback failed for {}: {}", self._path, message or error)
        self._video_widget.hide()
        self._error_label.show()

    def _update_time(self, position: int) -> None:
        self._time_label.setText(f"{format_duration(position)} / {format_duration(self._duration)}")

    # Public API
    def play(self) -> None:
        self._media_player.play()

    def pause(self) -> None:
        self._media_player.pause()

    def is_playing(self) -> bool:
        return self._media_player.playbackState() == QMediaPlayer.PlaybackState.PlayingState

    def cleanup(self) -> None:
        """Stop playback and release the media source."""
        try:
            self._media_player.stop()
            self._media_player.setSource(QUrl())
        except RuntimeError as ex:
            logger.debug("Video cleanup after teardown for {}: {}", self._path, ex)
