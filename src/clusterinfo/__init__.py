"""Keeps per-deployment cluster topology and hardware cost metadata in sync with the fleet inventory."""

__version__ = "0.3.1"
