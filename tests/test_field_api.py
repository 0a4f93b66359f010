from __future__ import annotations

from cropscout.domain.field_grid import create_field_grid


def _detections(cells, class_name="Leaf Blight"):
    grid = create_field_grid()
    payload = []
    for i, (row, col) in enumerate(cells):
        center = grid.cell(row, col).center
        payload.append(
            {
                "id": f"frame-{i}",
                "gps": {"lat": center.lat, "lng": center.lng},
                "timestamp": "2026-01-01T12:00:00Z",
                "detections": [{"className": class_name, "confidence": 0.91}],
            }
        )
    return payload


def test_health(client):
    response = client.get("/api/v1/field/health")
    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "data": {"status": "ok"}, "error": None}


def test_build_grid(client):
    body = {"detections": _detections([(0, 0), (0, 1), (7, 7)]) + [{"id": 99, "detections": []}]}
    response = client.post("/api/v1/field/grid", json=body)
    assert response.status_code == 200

    data = response.get_json()["data"]
    assert data["stats"]["infected_count"] == 3
    assert data["stats"]["total_cells"] == 100
    assert data["zones"] == [["0_0", "0_1"], ["7_7"]]
    assert data["zone_statistics"]["largest_zone"] == 2
    assert data["grid"]["cells"][0][0]["detection_ids"] == ["frame-0"]


def test_build_grid_rejects_bad_gps(client):
    body = {"detections": [{"id": "x", "gps": {"lat": 123, "lng": 0}}]}
    response = client.post("/api/v1/field/grid", json=body)
    assert response.status_code == 400
    payload = response.get_json()
    assert payload["ok"] is False
    assert payload["details"][0]["loc"] == ["detections", 0, "gps", "lat"]


def test_empty_body_is_an_empty_field(client):
    response = client.post("/api/v1/field/grid", data="not json", content_type="text/plain")
    assert response.status_code == 200
    assert response.get_json()["data"]["stats"]["infected_count"] == 0


def test_plan_path(client):
    body = {"detections": _detections([(0, 0), (9, 9)]), "strategy": "SWEEP"}
    response = client.post("/api/v1/field/path", json=body)
    assert response.status_code == 200

    data = response.get_json()["data"]
    assert data["path"]["strategy"] == "sweep"
    assert [wp["cell_id"] for wp in data["path"]["waypoints"]] == ["0_0", "9_9"]
    assert len(data["coordinates"]) == 4
    assert data["coordinates"][0] == data["coordinates"][-1]


def test_plan_path_with_launch_point(client):
    body = {"detections": _detections([(4, 4)]), "launch_point": {"lat": 28.6129, "lng": 77.2080}}
    data = client.post("/api/v1/field/path", json=body).get_json()["data"]
    assert data["path"]["start_point"] == {"lat": 28.6129, "lng": 77.2080}


def test_plan_path_unknown_strategy(client):
    response = client.post("/api/v1/field/path", json={"strategy": "spiral"})
    assert response.status_code == 400


def test_plan_path_without_infection(client):
    data = client.post("/api/v1/field/path", json={}).get_json()["data"]
    assert data["path"]["path_exists"] is False
    assert data["path"]["waypoints"] == []
    assert data["coordinates"] == []


def test_evaluate_and_debounce(client):
    body = {
        "detections": _detections([(0, 0), (0, 1)]),
        "sensor_data": {"soil_moisture": 15, "soil_temperature": 30, "air_humidity": 40},
    }
    first = client.post("/api/v1/field/evaluate", json=body).get_json()["data"]
    second = client.post("/api/v1/field/evaluate", json=body).get_json()["data"]

    first_ids = [a["rule_id"] for a in first["alerts"]]
    assert "RULE_003" in first_ids
    assert first["signals"]["soil_moisture"] == 15
    assert first["alerts"][0]["signals"]["soil_moisture"] == 15
    assert second["alerts"] == []
    assert second["suppressed_alerts"] == len(first_ids)

    reset = client.post("/api/v1/field/alerts/reset")
    assert reset.get_json()["data"] == {"reset": True}
    assert reset.get_json()["message"] == "Alert history cleared"

    third = client.post("/api/v1/field/evaluate", json=body).get_json()["data"]
    assert [a["rule_id"] for a in third["alerts"]] == first_ids


def test_evaluate_without_sensor(client):
    data = client.post("/api/v1/field/evaluate", json={"detections": []}).get_json()["data"]
    assert data["sensor_data"] is None
    assert data["sensor_warnings"] == ["No sensor data - environmental rules use default readings"]
    assert data["economic_impact"]["has_infection"] is False


def test_simulated_sensors(client):
    response = client.get("/api/v1/field/sensors/simulated")
    data = response.get_json()["data"]
    assert data["status"] == "online"
    assert 10 <= data["soil_moisture"] <= 95


def test_list_rules(client):
    data = client.get("/api/v1/field/rules").get_json()["data"]
    assert data["total"] == 10
    assert data["rules"][0]["id"] == "RULE_001"
    assert data["rules"][-1]["name"] == "System Healthy"


def test_rule_detail(client):
    response = client.get("/api/v1/field/rules/RULE_006")
    assert response.get_json()["data"]["type"] == "WARNING"

    missing = client.get("/api/v1/field/rules/RULE_404")
    assert missing.status_code == 404
    assert missing.get_json()["message"] == "Unknown rule 'RULE_404'"


def test_unknown_route_is_json(client):
    response = client.get("/api/v1/field/nope")
    assert response.status_code == 404
    assert response.get_json()["ok"] is False


def test_missing_container_is_500(app, client):
    app.config["CONTAINER"] = None
    response = client.get("/api/v1/field/rules/RULE_001")
    assert response.status_code == 200
    response = client.post("/api/v1/field/alerts/reset")
    assert response.status_code == 500
    assert response.get_json()["message"] == "An internal error occurred"
