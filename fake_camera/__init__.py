"""Fake camera driver: republishes a still image at a reconfigurable rate."""
