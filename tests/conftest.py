"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path

from PIL import Image
from loguru import logger


@pytest.fixture
def sample_media_names():
    """Sample media filenames for testing."""
    return [
        "img2.jpg",
        "img10.jpg",
        "img1.jpg",
        "holiday.PNG",
        "clip.mp4",
    ]


@pytest.fixture
def make_image(tmp_path):
    """Factory creating a real image file with Pillow."""
    def _make(name="photo.jpg", size=(640, 480), color=(200, 40, 40), directory=None):
        path = (directory or tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color).save(path)
        return path
    return _make


@pytest.fixture
def src_dir(tmp_path):
    """Source directory for move tests."""
    directory = tmp_path / "src"
    directory.mkdir()
    return directory


@pytest.fixture
def dest_dir(tmp_path):
    """Destination directory for move tests."""
    directory = tmp_path / "dest"
    directory.mkdir()
    return directory


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


class FakeObserver:
    """Stand-in for a watchdog observer; tests push events through the handler."""

    instances = []

    def __init__(self):
        self.handler = None
        self.path = None
        self.recursive = None
        self.started = False
        self.stopped = False
        self.joined = False
        FakeObserver.instances.append(self)

    def schedule(self, handler, path, recursive=False):
        self.handler = handler
        self.path = path
        self.recursive = recursive

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def join(self, timeout=None):
        self.joined = True


@pytest.fixture
def fake_observer_factory():
    """Observer factory returning FakeObserver instances."""
    FakeObserver.instances = []
    return FakeObserver
