"""
Publish rate.

A validated rate in Hz and the timer period derived from it. The publish
loop hands the period to whatever timer drives it (an rclpy timer in the
node).
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimiter:
    """Publish period derived from a positive rate in Hz."""
    rate_hz: float

    def __post_init__(self):
        rate_hz = float(self.rate_hz)
        if not math.isfinite(rate_hz) or rate_hz <= 0.0:
            raise ValueError(f'Publish rate must be a positive number of Hz, got {self.rate_hz}')
        object.__setattr__(self, 'rate_hz', rate_hz)

    @property
    def period(self) -> float:
        return 1.0 / self.rate_hz
