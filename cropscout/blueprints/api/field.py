"""Field Monitoring API
=====================

Stateless JSON endpoints over the field monitoring core. Every request
carries the full detection set; nothing is persisted between requests apart
from the alert debouncer.

Routes:
    POST /api/v1/field/grid               - Map detections onto the grid, with stats and zones
    POST /api/v1/field/path               - Plan a spray mission over infected cells
    POST /api/v1/field/evaluate           - Full monitoring cycle (economics, fusion, alerts, path)
    POST /api/v1/field/alerts/reset       - Forget debounced alerts
    GET  /api/v1/field/sensors/simulated  - One simulated sensor snapshot
    GET  /api/v1/field/rules              - Decision table
    GET  /api/v1/field/rules/<rule_id>    - One decision rule
    GET  /api/v1/field/health             - Liveness probe
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, request

from cropscout.domain.exceptions import ServiceError
from cropscout.domain.field_grid import calculate_grid_stats
from cropscout.schemas.field import DetectionBatchRequest, EvaluateRequest, SprayPathRequest
from cropscout.services.decision_rules import DECISION_RULES, get_rule
from cropscout.services.path_planner import get_path_coordinates
from cropscout.services.zone_mapper import get_zone_statistics, identify_infected_zones
from cropscout.utils.http import safe_route, success_response

logger = logging.getLogger(__name__)

field_api = Blueprint("field_api", __name__)


def _get_container():
    """Resolve the ServiceContainer from the app config."""
    container = current_app.config.get("CONTAINER")
    if container is None:
        raise ServiceError("Field monitoring services not available")
    return container


def _get_json() -> dict:
    return request.get_json(silent=True) or {}


@field_api.post("/grid")
@safe_route("Failed to build field grid")
def build_grid() -> Response:
    """Map detections onto the field grid.

    Body:
        ``{"detections": [{"id", "gps": {"lat", "lng"}, "detections": [...]}]}``

    Returns:
        ``{"grid": [[cell...]], "stats": {...}, "zones": [[cell_id...]], "zone_statistics": {...}}``
    """
    payload = DetectionBatchRequest.model_validate(_get_json())
    monitor = _get_container().field_monitor

    grid = monitor.build_grid(payload.records())
    zones = identify_infected_zones(grid)
    return success_response(
        {
            "grid": grid.to_dict(),
            "stats": calculate_grid_stats(grid).to_dict(),
            "zones": [[cell.id for cell in zone] for zone in zones],
            "zone_statistics": get_zone_statistics(zones).to_dict(),
        }
    )


@field_api.post("/path")
@safe_route("Failed to plan spray path")
def plan_path() -> Response:
    """Plan a round-trip spray mission.

    Body:
        ``{"detections": [...], "strategy": "nearest_neighbor" | "sweep", "launch_point": {"lat", "lng"}}``
    """
    payload = SprayPathRequest.model_validate(_get_json())
    monitor = _get_container().field_monitor

    grid = monitor.build_grid(payload.records())
    path = monitor.plan_path(
        grid,
        strategy=payload.strategy,
        launch_point=payload.launch_point.to_domain() if payload.launch_point else None,
    )
    return success_response({"path": path.to_dict(), "coordinates": get_path_coordinates(path)})


@field_api.post("/evaluate")
@safe_route("Failed to evaluate field")
def evaluate_field() -> Response:
    """Run one full monitoring cycle.

    Body:
        ``{"detections": [...], "sensor_data": {...}, "strategy": "..."}``

    Returns the field snapshot; ``alerts`` holds only the alerts that passed
    the debouncer on this call.
    """
    payload = EvaluateRequest.model_validate(_get_json())
    monitor = _get_container().field_monitor

    snapshot = monitor.evaluate(payload.records(), payload.sensor_snapshot(), strategy=payload.strategy)
    return success_response(snapshot.to_dict())


@field_api.post("/alerts/reset")
@safe_route("Failed to reset alerts")
def reset_alerts() -> Response:
    _get_container().field_monitor.reset_alerts()
    logger.info("Alert debounce state reset via API")
    return success_response({"reset": True}, message="Alert history cleared")


@field_api.get("/sensors/simulated")
@safe_route("Failed to simulate sensor data")
def simulated_sensors() -> Response:
    snapshot = _get_container().sensor_simulator.snapshot()
    return success_response(snapshot.to_dict())


@field_api.get("/health")
def health() -> Response:
    return success_response({"status": "ok"})


@field_api.get("/rules")
@safe_route("Failed to list decision rules")
def list_rules() -> Response:
    """Decision table in evaluation order."""
    return success_response({"rules": [rule.to_dict() for rule in DECISION_RULES], "total": len(DECISION_RULES)})


@field_api.get("/rules/<rule_id>")
@safe_route("Failed to get decision rule")
def rule_detail(rule_id: str) -> Response:
    return success_response(get_rule(rule_id).to_dict())
