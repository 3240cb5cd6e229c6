"""
Publish loop.

Each timer tick stamps and publishes the outgoing image message. After the
tick the loop checks the controller's rate limiter; if it was replaced, the
timer is recreated with the new period, so a rate change takes effect from
the next wait on.
"""

import logging

from .message_builder import UINT32_MAX, OutgoingMessage


class PublishLoop:
    """Periodic publisher of the controller's current image."""

    def __init__(self, controller, publish, create_timer, clock,
                 destroy_timer=None, logger=None):
        """
        Args:
            controller: ReconfigurationController holding the current state
            publish: callable taking the OutgoingMessage; fire-and-forget
            create_timer: callable (period_s, callback) -> timer with cancel()
            clock: callable returning the current time as an object with
                sec and nanosec (builtin_interfaces/Time in the node)
            destroy_timer: optional callable releasing a cancelled timer
        """
        self.controller = controller
        self.publish = publish
        self.create_timer = create_timer
        self.destroy_timer = destroy_timer
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

        self.message = OutgoingMessage()
        self.seq = 0
        self.timer = None
        self._fields = None
        self._limiter = None

    def tick(self) -> OutgoingMessage:
        """Stamp and publish one frame."""
        fields = self.controller.image_fields
        if fields is not self._fields:
            self.message.apply(fields)
            self._fields = fields

        # One clock read per frame
        self.message.stamp(self.seq, self.clock(), self.controller.frame_id)

        try:
            self.publish(self.message)
        except Exception as e:
            self.logger.error(f'Failed to publish frame {self.seq}: {e}')
        else:
            self.logger.debug(f'Published frame {self.seq}')

        self.seq = (self.seq + 1) & UINT32_MAX
        return self.message

    def start(self):
        """Create the timer for the controller's current rate."""
        self._schedule(self.controller.rate_limiter)

    def stop(self):
        if self.timer is not None:
            self._cancel(self.timer)
            self.timer = None
        self.logger.info('Publish loop stopped')

    def on_timer(self):
        self.tick()
        limiter = self.controller.rate_limiter
        if limiter is not self._limiter:
            self._cancel(self.timer)
            self._schedule(limiter)

    def _schedule(self, limiter):
        self._limiter = limiter
        self.timer = self.create_timer(limiter.period, self.on_timer)
        self.logger.info(f'Publishing at {limiter.rate_hz:g} Hz')

    def _cancel(self, timer):
        timer.cancel()
        if self.destroy_timer is not None:
            self.destroy_timer(timer)
