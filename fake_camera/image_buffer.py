"""
Image buffer - the decoded still image served by the fake camera.

Images are decoded with OpenCV as stored on disk and normalized to
8-bit grayscale or 8-bit RGB. A buffer is never modified after
construction; refreshing produces a new one.
"""

import os
from dataclasses import dataclass

import cv2
import numpy as np


class DecodeError(Exception):
    """The image file could not be turned into a buffer."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Can't load '{path}': {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class ImageBuffer:
    """Raster image: row-major pixels, `bytes_per_row` bytes per row."""
    width: int = 0
    height: int = 0
    bytes_per_row: int = 0
    channel_count: int = 0
    pixels: bytes = b''

    def __post_init__(self):
        if self.bytes_per_row != self.width * self.channel_count:
            raise ValueError(
                f'bytes_per_row {self.bytes_per_row} does not match '
                f'{self.width}x{self.channel_count}')
        if len(self.pixels) != self.height * self.bytes_per_row:
            raise ValueError(
                f'pixel data is {len(self.pixels)} bytes, expected '
                f'{self.height * self.bytes_per_row}')

    @property
    def is_empty(self) -> bool:
        return self.height == 0 or self.width == 0

    @classmethod
    def from_array(cls, image: np.ndarray) -> 'ImageBuffer':
        """Build a buffer from an HxW or HxWxC uint8 array."""
        if image.dtype != np.uint8:
            raise ValueError(f'Unsupported pixel depth: {image.dtype}')
        if image.ndim == 2:
            channels = 1
        elif image.ndim == 3:
            channels = image.shape[2]
        else:
            raise ValueError(f'Unsupported image shape: {image.shape}')

        height, width = image.shape[:2]
        return cls(
            width=width,
            height=height,
            bytes_per_row=width * channels,
            channel_count=channels,
            pixels=np.ascontiguousarray(image).tobytes(),
        )


ImageBuffer.EMPTY = ImageBuffer()


def _normalize(image: np.ndarray) -> np.ndarray:
    """Convert an OpenCV image to mono8 or RGB8 layout."""
    if image.ndim == 2:
        return image
    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0]
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGB)
    raise ValueError(f'unsupported channel count {channels}')


def load_image(path: str) -> ImageBuffer:
    """Decode `path` into a new buffer. Raises DecodeError."""
    if not os.path.isfile(path):
        raise DecodeError(path, 'no such file')

    image = cv2.imread(path, cv2.IMREAD_ANYDEPTH | cv2.IMREAD_ANYCOLOR)
    if image is None:
        raise DecodeError(path, 'not a decodable image')
    if image.dtype != np.uint8:
        raise DecodeError(path, f'unsupported pixel depth {image.dtype}, expected 8-bit')

    try:
        return ImageBuffer.from_array(_normalize(image))
    except ValueError as e:
        raise DecodeError(path, str(e)) from e


def refresh(current: ImageBuffer, path: str) -> ImageBuffer:
    """
    Reload the buffer from `path`.

    An empty path leaves `current` in place. On DecodeError the caller
    keeps `current`; this function never returns a partial buffer.
    """
    if not path:
        return current
    return load_image(path)
