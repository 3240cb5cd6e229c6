"""
Reconfiguration controller.

Applies reconfiguration events to the state the publish loop reads: the
image buffer, the image message fields built from it, the rate limiter and
the header frame id. Each of these is an immutable value replaced whole
under a lock, so the publish loop never sees a half-applied update.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .change_detector import ChangeMask, ConfigChangeDetector
from .config import DEFAULT_FRAME_ID, DEFAULT_PUBLISH_RATE_HZ, FakeCameraConfig
from .image_buffer import DecodeError, ImageBuffer, refresh
from .message_builder import ImageFields, rebuild
from .rate import RateLimiter


@dataclass(frozen=True)
class ReconfigureResult:
    """Fields applied by one event, and fields rejected with the reason."""
    applied: Tuple[str, ...] = ()
    rejected: Dict[str, str] = field(default_factory=dict)

    @property
    def successful(self) -> bool:
        return not self.rejected


class ReconfigurationController:
    """Owns the fake camera state and applies configuration changes to it."""

    def __init__(self, detector: ConfigChangeDetector = None, logger=None):
        self.detector = detector or ConfigChangeDetector.from_descriptions()
        self.logger = logger or logging.getLogger(__name__)

        # Field ids resolved once
        self._image_path_id = self.detector.field_id('image_path')
        self._publish_rate_id = self.detector.field_id('publish_rate_hz')
        self._frame_id_id = self.detector.field_id('frame_id')

        self._lock = threading.Lock()
        self._buffer = ImageBuffer.EMPTY
        self._image_fields = ImageFields.EMPTY
        # Defaults until the first reconfiguration event applies the configuration
        self._rate_limiter = RateLimiter(DEFAULT_PUBLISH_RATE_HZ)
        self._frame_id = DEFAULT_FRAME_ID

    @property
    def buffer(self) -> ImageBuffer:
        with self._lock:
            return self._buffer

    @property
    def image_fields(self) -> ImageFields:
        with self._lock:
            return self._image_fields

    @property
    def rate_limiter(self) -> RateLimiter:
        with self._lock:
            return self._rate_limiter

    @property
    def frame_id(self) -> str:
        with self._lock:
            return self._frame_id

    def load_initial(self, path: str) -> bool:
        """Load the startup image given on the command line."""
        return self._update_image(path)

    def on_reconfigure(self, config: FakeCameraConfig, mask: int) -> ReconfigureResult:
        """Apply the fields of `config` that `mask` marks as changed."""
        mask = ChangeMask(mask)
        if mask.is_first:
            self.logger.info('First reconfiguration event')
        self.logger.info(
            f'level={int(mask)} image_path={config.image_path!r} '
            f'publish_rate_hz={config.publish_rate_hz} frame_id={config.frame_id!r}'
            f' changed={self.detector.changed_fields(mask)}')

        applied = []
        rejected = {}

        if self.detector.changed(mask, self._image_path_id):
            if self._update_image(config.image_path):
                applied.append('image_path')
            else:
                rejected['image_path'] = f"Can't load '{config.image_path}'"

        if self.detector.changed(mask, self._publish_rate_id):
            reason = self._update_rate(config.publish_rate_hz)
            if reason is None:
                applied.append('publish_rate_hz')
            else:
                rejected['publish_rate_hz'] = reason

        if self.detector.changed(mask, self._frame_id_id):
            with self._lock:
                self._frame_id = config.frame_id
            self.logger.info(f'Updated frame_id: {config.frame_id!r}')
            applied.append('frame_id')

        return ReconfigureResult(applied=tuple(applied), rejected=rejected)

    def _update_image(self, path: str) -> bool:
        current = self.buffer
        try:
            buffer = refresh(current, path)
        except DecodeError as e:
            self.logger.error(f'{e}; keeping previous image')
            return False

        if buffer is current:
            return True

        fields = rebuild(buffer)
        with self._lock:
            self._buffer = buffer
            self._image_fields = fields
        self.logger.info(
            f'Loaded image: {path} ({buffer.width}x{buffer.height}, {fields.encoding})')
        return True

    def _update_rate(self, rate_hz):
        try:
            limiter = RateLimiter(rate_hz)
        except (TypeError, ValueError) as e:
            self.logger.warning(f'{e}; keeping {self.rate_limiter.rate_hz:g} Hz')
            return str(e)

        with self._lock:
            self._rate_limiter = limiter
        self.logger.info(f'Updated publish rate: {limiter.rate_hz:g} Hz')
        return None
