"""
Schemas Module
==============

This module provides Pydantic models for request validation.
Schemas ensure data integrity and provide automatic validation.
"""

from cropscout.schemas.field import (
    DetectionBatchRequest,
    DetectionRecordSchema,
    DetectionSchema,
    EvaluateRequest,
    GpsSchema,
    SensorDataSchema,
    SprayPathRequest,
)

__all__ = [
    "DetectionBatchRequest",
    "DetectionRecordSchema",
    "DetectionSchema",
    "EvaluateRequest",
    "GpsSchema",
    "SensorDataSchema",
    "SprayPathRequest",
]
