"""Envoy CLI client for managing projects, environments and variables."""

__version__ = "0.1.0"
