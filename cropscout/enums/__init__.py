"""
Enums Module
============

Enumeration types for the CropScout application.
"""

from cropscout.enums.common import (
    AlertCategory,
    AlertType,
    FusionStatus,
    PathStrategy,
    ReadingStatus,
    SprayAction,
)

__all__ = [
    "AlertCategory",
    "AlertType",
    "FusionStatus",
    "PathStrategy",
    "ReadingStatus",
    "SprayAction",
]
