"""
Field Monitoring Schemas
========================

Request schemas for the field grid, spray path and evaluation endpoints.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from cropscout.domain.detections import Detection, DetectionRecord
from cropscout.domain.geo import GeoPoint
from cropscout.domain.sensors import SensorSnapshot
from cropscout.enums import PathStrategy


class GpsSchema(BaseModel):
    lat: float = Field(..., ge=-90, le=90, description="Latitude (decimal degrees)")
    lng: float = Field(..., ge=-180, le=180, description="Longitude (decimal degrees)")

    def to_domain(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)


class DetectionSchema(BaseModel):
    """One classified object; detector builds disagree on the label key."""

    class_name: str = Field(
        default="unknown",
        validation_alias=AliasChoices("class_name", "className", "class", "label"),
    )
    confidence: float = Field(default=0.5, ge=0, le=1)

    def to_domain(self) -> Detection:
        return Detection(class_name=self.class_name, confidence=self.confidence)


class DetectionRecordSchema(BaseModel):
    """One analysed drone frame."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Detection record identifier")
    gps: GpsSchema | None = Field(default=None, description="Frame position; records without it are skipped")
    timestamp: str | None = None
    detections: list[DetectionSchema] = Field(default_factory=list)
    detection_count: int | None = Field(default=None, ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Firebase push keys are strings, simulators send integers."""
        if isinstance(v, int):
            return str(v)
        return v

    def to_domain(self) -> DetectionRecord:
        detections = tuple(d.to_domain() for d in self.detections)
        return DetectionRecord(
            id=self.id,
            gps=self.gps.to_domain() if self.gps else None,
            timestamp=self.timestamp,
            detections=detections,
            detection_count=self.detection_count if self.detection_count is not None else len(detections),
        )


class SensorDataSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    soil_moisture: float | None = Field(default=None, description="Soil moisture (%)")
    soil_temperature: float | None = Field(default=None, description="Soil temperature (°C)")
    air_humidity: float | None = Field(default=None, description="Air humidity (%)")
    soil_ph: float | None = None
    light_intensity: float | None = None
    timestamp: str | None = None
    sensor_id: str | None = None
    status: str | None = None

    def to_domain(self) -> SensorSnapshot:
        return SensorSnapshot(**self.model_dump())


class DetectionBatchRequest(BaseModel):
    """Request schema for building the field grid."""

    detections: list[DetectionRecordSchema] = Field(default_factory=list)

    def records(self) -> list[DetectionRecord]:
        return [d.to_domain() for d in self.detections]


class SprayPathRequest(DetectionBatchRequest):
    """Request schema for planning a spray mission."""

    strategy: PathStrategy | None = Field(default=None, description="nearest_neighbor or sweep")
    launch_point: GpsSchema | None = Field(default=None, description="Defaults to the field centre")

    @field_validator("strategy", mode="before")
    @classmethod
    def normalize_strategy(cls, v):
        if isinstance(v, str):
            return PathStrategy(v.lower())
        return v


class EvaluateRequest(DetectionBatchRequest):
    """Request schema for a full monitoring cycle."""

    sensor_data: SensorDataSchema | None = None
    strategy: PathStrategy | None = None

    @field_validator("strategy", mode="before")
    @classmethod
    def normalize_strategy(cls, v):
        if isinstance(v, str):
            return PathStrategy(v.lower())
        return v

    def sensor_snapshot(self) -> SensorSnapshot | None:
        return self.sensor_data.to_domain() if self.sensor_data else None
