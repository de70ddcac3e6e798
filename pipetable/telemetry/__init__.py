"""Telemetry and observability helpers.

This package emits structured run events for formatter stages.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
