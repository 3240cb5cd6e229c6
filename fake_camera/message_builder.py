"""
Image message construction.

`rebuild` maps an ImageBuffer onto the image fields of a sensor_msgs/Image
style record. `OutgoingMessage` is the record the publish loop reuses for
every frame.
"""

from dataclasses import dataclass, field

from .image_buffer import ImageBuffer

# sensor_msgs image_encodings
MONO8 = 'mono8'
RGB8 = 'rgb8'

UINT32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class ImageFields:
    width: int = 0
    height: int = 0
    step: int = 0
    encoding: str = ''
    is_bigendian: bool = False
    data: bytes = b''


ImageFields.EMPTY = ImageFields()


def encoding_for(channel_count: int) -> str:
    if channel_count == 1:
        return MONO8
    if channel_count == 3:
        return RGB8
    raise ValueError(f'No 8-bit encoding for {channel_count} channels (expected 1 or 3)')


def rebuild(buffer: ImageBuffer) -> ImageFields:
    """Image fields for `buffer`. Empty buffers give empty fields."""
    if buffer.is_empty:
        return ImageFields.EMPTY

    step = buffer.bytes_per_row
    return ImageFields(
        width=buffer.width,
        height=buffer.height,
        step=step,
        encoding=encoding_for(buffer.channel_count),
        is_bigendian=False,
        data=bytes(buffer.pixels[:buffer.height * step]),
    )


@dataclass
class Stamp:
    sec: int = 0
    nanosec: int = 0


@dataclass
class Header:
    seq: int = 0
    frame_id: str = ''
    stamp: Stamp = field(default_factory=Stamp)


@dataclass
class OutgoingMessage:
    """Mutable image message published on every tick."""
    header: Header = field(default_factory=Header)
    width: int = 0
    height: int = 0
    step: int = 0
    is_bigendian: bool = False
    encoding: str = ''
    data: bytes = b''

    def apply(self, fields: ImageFields):
        """Replace the image fields. Header is left alone."""
        self.width = fields.width
        self.height = fields.height
        self.step = fields.step
        self.is_bigendian = fields.is_bigendian
        self.encoding = fields.encoding
        self.data = fields.data

    def stamp(self, seq: int, stamp: Stamp, frame_id: str):
        """Replace the header fields. Image fields are left alone."""
        self.header = Header(seq=seq & UINT32_MAX, frame_id=frame_id, stamp=stamp)
