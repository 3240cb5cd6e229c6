#!/usr/bin/env python3
"""
Launch the fake camera.

Usage:
  ros2 launch fake_camera fake_camera.launch.py image_file:=/path/to/image.png
  ros2 launch fake_camera fake_camera.launch.py image_file:=/path/to/image.png publish_rate_hz:=5.0
"""

from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument, OpaqueFunction
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def launch_setup(context, *args, **kwargs):
    """Setup function that runs after launch arguments are resolved."""
    image_file = LaunchConfiguration('image_file').perform(context)
    publish_rate_hz = float(LaunchConfiguration('publish_rate_hz').perform(context))
    frame_id = LaunchConfiguration('frame_id').perform(context)

    fake_camera = Node(
        package='fake_camera',
        executable='fake_camera',
        name='fake_camera',
        arguments=[image_file],
        parameters=[{
            'publish_rate_hz': publish_rate_hz,
            'frame_id': frame_id,
        }],
        output='screen',
    )

    return [fake_camera]


def generate_launch_description():
    # Launch arguments
    image_file_arg = DeclareLaunchArgument(
        'image_file',
        description='Image file to publish'
    )

    publish_rate_arg = DeclareLaunchArgument(
        'publish_rate_hz',
        default_value='30.0',
        description='Publish rate in Hz'
    )

    frame_id_arg = DeclareLaunchArgument(
        'frame_id',
        default_value='camera',
        description='Header frame_id of published images'
    )

    return LaunchDescription([
        image_file_arg,
        publish_rate_arg,
        frame_id_arg,
        OpaqueFunction(function=launch_setup),
    ])
