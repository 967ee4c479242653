"""
Experience bases: stores of asserted and derived judgments.
"""

from nal_engine.experience.base import BaseExperienceBase
from nal_engine.experience.in_memory import ExperienceBase

__all__ = [
    "BaseExperienceBase",
    "ExperienceBase",
]
