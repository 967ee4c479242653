"""
Utility modules for NAL-Engine.
"""

from nal_engine.utils.logging import build_formatter, configure_logging

__all__ = [
    "build_formatter",
    "configure_logging",
]
