#!/usr/bin/env python3
"""
Fake Camera Node - Entry Point

Takes the initial image file as its first (non-ROS) argument.

Usage:
  ros2 run fake_camera fake_camera /path/to/image.png
  ros2 run fake_camera fake_camera /path/to/image.png --ros-args -p publish_rate_hz:=5.0
"""

import sys

import rclpy
from rclpy.utilities import remove_ros_args

USAGE = 'Usage: fake_camera image_file'


def main(args=None):
    argv = remove_ros_args(args if args is not None else sys.argv)
    if len(argv) < 2:
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    rclpy.init(args=args)

    from .fake import FakeCameraNode
    node = FakeCameraNode(argv[1])

    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()
