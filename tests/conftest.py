import numpy as np
import pytest


class StubDetector(object):
    """Returns a fixed set of segments regardless of the image."""

    def __init__(self, lines):
        self.lines = np.asarray(lines, dtype=int).reshape(-1, 4)
        self.calls = 0

    def detect(self, img):
        self.calls += 1
        return self.lines


@pytest.fixture
def blank_image():
    return np.full((200, 300, 3), 127, dtype=np.uint8)


@pytest.fixture
def stub_detector():
    return StubDetector
