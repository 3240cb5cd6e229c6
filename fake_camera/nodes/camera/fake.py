#!/usr/bin/env python3
"""
Fake Camera - Republishes a still image at a reconfigurable rate.

Parameters image_path, publish_rate_hz and frame_id can be changed while
the node runs; only the parameters being set are applied.

Usage:
  ros2 run fake_camera fake_camera /path/to/image.png
  ros2 run fake_camera fake_camera /path/to/image.png --ros-args -p publish_rate_hz:=10.0
  ros2 param set /fake_camera image_path /path/to/other.png
"""

from rcl_interfaces.msg import ParameterDescriptor, SetParametersResult
from rclpy.parameter import Parameter

from fake_camera.change_detector import ChangeMask, ConfigChangeDetector
from fake_camera.config import PARAM_DESCRIPTIONS, FakeCameraConfig
from fake_camera.controller import ReconfigurationController
from .base import BaseCameraNode


class FakeCameraNode(BaseCameraNode):
    """Camera node that publishes a still image loaded from disk."""

    def __init__(self, image_file: str, node_name: str = 'fake_camera', **kwargs):
        super().__init__(node_name, **kwargs)

        # Reconfigurable parameters
        for param in PARAM_DESCRIPTIONS:
            self.declare_parameter(
                param.name,
                param.default,
                ParameterDescriptor(
                    description=param.description,
                    dynamic_typing=param.dynamic_typing,
                ),
            )

        self.detector = ConfigChangeDetector.from_descriptions(PARAM_DESCRIPTIONS)
        self.controller = ReconfigurationController(self.detector, logger=self.get_logger())

        self.get_logger().info(f"Image='{image_file}'")
        self.controller.load_initial(image_file)

        # First event: every field counts as changed
        result = self.controller.on_reconfigure(self.current_config(), ChangeMask.SENTINEL)
        if 'publish_rate_hz' in result.rejected:
            rate_hz = self.controller.rate_limiter.rate_hz
            self.get_logger().warning(f'Resetting publish_rate_hz to {rate_hz:g}')
            self.set_parameters([Parameter('publish_rate_hz', Parameter.Type.DOUBLE, rate_hz)])
        self.add_on_set_parameters_callback(self.on_set_parameters)

        self.start_publishing(self.controller)

    def current_config(self, overrides=None) -> FakeCameraConfig:
        """Snapshot of the declared parameters, with `overrides` applied."""
        values = {p.name: self.get_parameter(p.name).value for p in PARAM_DESCRIPTIONS}
        values.update(overrides or {})
        return FakeCameraConfig(**values)

    def on_set_parameters(self, parameters) -> SetParametersResult:
        """Reconfiguration callback for parameter set requests."""
        changes = {
            p.name: p.value for p in parameters
            if self.detector.field_id(p.name)
        }
        if not changes:
            return SetParametersResult(successful=True)

        mask = self.detector.mask_for(changes)
        result = self.controller.on_reconfigure(self.current_config(changes), mask)
        if not result.successful:
            reason = '; '.join(f'{name}: {why}' for name, why in result.rejected.items())
            return SetParametersResult(successful=False, reason=reason)
        return SetParametersResult(successful=True)
