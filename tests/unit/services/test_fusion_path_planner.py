import pytest

from cropscout.domain.field_grid import create_field_grid
from cropscout.domain.sensors import SensorSnapshot
from cropscout.enums import SprayAction
from cropscout.services.fusion_path_planner import (
    FusionAwarePlan,
    ZoneAction,
    calculate_fusion_savings,
    classify_cell_action,
    generate_fusion_aware_path,
)
from cropscout.services.zone_mapper import map_detections_to_grid


@pytest.mark.parametrize(
    "diagnosis, severity, action, priority",
    [
        ("Fungal Infection (High Humidity)", "high", SprayAction.CHEMICAL_SPRAY, 1),
        ("Disease Confirmed", "medium", SprayAction.CHEMICAL_SPRAY, 2),
        ("Drought Stress", "high", SprayAction.IRRIGATION, 1),
        ("Heat Stress", "medium", SprayAction.IRRIGATION, 2),
        ("Overwatering / Root Rot Risk", "high", SprayAction.MONITOR, 3),
        ("Cold Stress", "low", SprayAction.MONITOR, 3),
        ("Nutrient Deficiency (pH imbalance)", "medium", SprayAction.NONE, None),
        ("Healthy (Confirmed)", "none", SprayAction.NONE, None),
    ],
)
def test_classify_cell_action(diagnosis, severity, action, priority):
    cell = create_field_grid().cell(3, 4)
    zone = classify_cell_action(cell, diagnosis, severity)
    assert (zone.row, zone.col) == (3, 4)
    assert zone.action == action
    assert zone.priority == priority


def test_plan_routes_cells_by_diagnosis(make_record, cell_center):
    records = [
        make_record("dry-1", cell_center(0, 0), class_name="Yellow Leaves"),
        make_record("dry-2", cell_center(0, 1), class_name="Wilting"),
        make_record("odd", cell_center(5, 5), class_name="Mosaic Virus"),
    ]
    grid = map_detections_to_grid(records)
    plan = generate_fusion_aware_path(grid, records, SensorSnapshot(soil_moisture=20))

    assert [(z.row, z.col) for z in plan.irrigation] == [(0, 0), (0, 1)]
    assert all(z.diagnosis == "Drought Stress" for z in plan.irrigation)
    assert plan.chemical_spray == []
    assert plan.total_actionable == 2
    # Every other cell, including the uncertain one, needs no action
    assert len(plan.no_action) == 98


def test_plan_sprays_fungal_cells(make_record, cell_center):
    records = [make_record("wet", cell_center(2, 2), class_name="Leaf Blight")]
    grid = map_detections_to_grid(records)
    plan = generate_fusion_aware_path(grid, records, SensorSnapshot(soil_moisture=80, air_humidity=90))

    assert [(z.row, z.col, z.priority) for z in plan.chemical_spray] == [(2, 2, 1)]
    data = plan.to_dict()
    assert data["chemical_spray"]["count"] == 1
    assert data["chemical_spray"]["high_priority"] == 1
    assert data["chemical_spray"]["zones"][0]["action"] == "chemical_spray"


def test_cell_whose_records_are_missing_is_no_action(make_record, cell_center):
    records = [make_record("a", cell_center(1, 1), class_name="Yellow Leaves")]
    grid = map_detections_to_grid(records)
    plan = generate_fusion_aware_path(grid, [], SensorSnapshot(soil_moisture=20))
    assert plan.total_actionable == 0
    assert len(plan.no_action) == 100


def test_vision_only_cells_are_not_routed_by_label(make_record, cell_center):
    records = [make_record("wilt", cell_center(3, 3), class_name="Drought Wilting")]
    grid = map_detections_to_grid(records)
    plan = generate_fusion_aware_path(grid, records, None)

    assert plan.irrigation == []
    assert plan.total_actionable == 0
    assert len(plan.no_action) == 100


def test_fusion_savings():
    plan = FusionAwarePlan(chemical_spray=[ZoneAction(0, i, SprayAction.CHEMICAL_SPRAY) for i in range(3)])
    savings = calculate_fusion_savings(10, plan, cost_per_cell=60, false_positive_cost=10)

    assert savings["vision_only_cost"] == 600
    assert savings["fusion_aware_cost"] == 180
    assert savings["chemical_savings"] == 420
    assert savings["false_positive_prevention"] == 70
    assert savings["total_savings"] == 490
    assert savings["savings_percentage"] == 70.0


def test_fusion_savings_without_vision_positives():
    savings = calculate_fusion_savings(0, FusionAwarePlan(), cost_per_cell=60)
    assert savings["savings_percentage"] == 0.0
    assert savings["total_savings"] == 0
