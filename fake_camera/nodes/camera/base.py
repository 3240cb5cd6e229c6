#!/usr/bin/env python3
"""
Base Camera Node - Shared publishing logic for fake camera sources.
"""

from rclpy.node import Node
from sensor_msgs.msg import Image

from fake_camera.config import DEFAULT_QUEUE_SIZE, DEFAULT_TOPIC
from fake_camera.message_builder import OutgoingMessage
from fake_camera.publish_loop import PublishLoop


class BaseCameraNode(Node):
    """Base class for camera nodes. Subclasses provide the controller."""

    def __init__(self, node_name: str, **kwargs):
        super().__init__(node_name, **kwargs)

        # Startup-only parameters
        self.declare_parameter('topic', DEFAULT_TOPIC)
        self.declare_parameter('queue_size', DEFAULT_QUEUE_SIZE)
        self.topic = self.get_parameter('topic').value
        queue_size = self.get_parameter('queue_size').value

        # Publisher
        self.image_pub = self.create_publisher(Image, self.topic, queue_size)

        self._image_msg = Image()
        self._published_data = None
        self.publish_loop = None

    def now(self):
        """Current ROS time as builtin_interfaces/Time, read once."""
        return self.get_clock().now().to_msg()

    def to_image_msg(self, message: OutgoingMessage) -> Image:
        """Copy the outgoing message into the reused sensor_msgs/Image."""
        msg = self._image_msg
        msg.header.stamp.sec = message.header.stamp.sec
        msg.header.stamp.nanosec = message.header.stamp.nanosec
        msg.header.frame_id = message.header.frame_id

        if message.data is not self._published_data:
            msg.width = message.width
            msg.height = message.height
            msg.step = message.step
            msg.encoding = message.encoding
            msg.is_bigendian = int(message.is_bigendian)
            msg.data = message.data
            self._published_data = message.data
        return msg

    def publish_message(self, message: OutgoingMessage):
        # std_msgs/Header has no seq in ROS 2; it stays on the outgoing message
        self.image_pub.publish(self.to_image_msg(message))

    def start_publishing(self, controller):
        """Start the publish timer for `controller`."""
        self.publish_loop = PublishLoop(
            controller,
            self.publish_message,
            create_timer=self.create_timer,
            destroy_timer=self.destroy_timer,
            clock=self.now,
            logger=self.get_logger(),
        )
        self.publish_loop.start()
        self.get_logger().info(f'Publishing to {self.topic}')

    def stop_publishing(self):
        if self.publish_loop is not None:
            self.publish_loop.stop()
            self.publish_loop = None

    def destroy_node(self):
        """Stop the publish timer before tearing down the node."""
        self.stop_publishing()
        super().destroy_node()
