import cv2
import numpy as np
import pytest


@pytest.fixture
def color_image():
    """4x6 BGR image, top-left pixel pure blue."""
    img = np.zeros((4, 6, 3), dtype=np.uint8)
    img[:, :] = (10, 20, 30)
    img[0, 0] = (255, 0, 0)
    return img


@pytest.fixture
def color_png(tmp_path, color_image):
    path = tmp_path / 'cat.png'
    assert cv2.imwrite(str(path), color_image)
    return str(path)


@pytest.fixture
def gray_png(tmp_path):
    img = np.arange(5 * 7, dtype=np.uint8).reshape(5, 7)
    path = tmp_path / 'gray.png'
    assert cv2.imwrite(str(path), img)
    return str(path)


@pytest.fixture
def missing_png(tmp_path):
    return str(tmp_path / 'missing.png')
