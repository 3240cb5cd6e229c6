"""
Fake camera configuration.

The reconfigurable fields, their defaults and change levels. Each level is
the bit that marks the field as changed in a reconfiguration event.
"""

from dataclasses import dataclass
from typing import Any, Tuple

DEFAULT_PUBLISH_RATE_HZ = 30.0
DEFAULT_FRAME_ID = 'camera'
DEFAULT_TOPIC = 'image_raw'
DEFAULT_QUEUE_SIZE = 1000


@dataclass(frozen=True)
class ParamDescription:
    """One entry of the field-description table."""
    name: str
    default: Any
    level: int
    description: str
    # Accept any numeric type on set (ints from `ros2 param set`)
    dynamic_typing: bool = False


PARAM_DESCRIPTIONS: Tuple[ParamDescription, ...] = (
    ParamDescription('image_path', '', 1, 'Image file to publish (empty keeps the current image)'),
    ParamDescription('publish_rate_hz', DEFAULT_PUBLISH_RATE_HZ, 2, 'Publish rate in Hz', dynamic_typing=True),
    ParamDescription('frame_id', DEFAULT_FRAME_ID, 4, 'Header frame_id of published images'),
)


@dataclass(frozen=True)
class FakeCameraConfig:
    """Configuration snapshot delivered with every reconfiguration event."""
    image_path: str = ''
    publish_rate_hz: float = DEFAULT_PUBLISH_RATE_HZ
    frame_id: str = DEFAULT_FRAME_ID
