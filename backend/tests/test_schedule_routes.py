def block(day, start, end, room="A-101"):
    return {"day": day, "startTime": start, "endTime": end, "room": room}


def test_conflicts_endpoint_reports_overlaps(client):
    response = client.post(
        "/api/schedules/conflicts",
        json={"blocks": [block("Monday", "08:00", "10:00"), block("Monday", "09:00", "11:00")]},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["hasConflicts"] is True
    assert len(payload["conflicts"]) == 1
    conflict = payload["conflicts"][0]
    assert conflict["blockA"]["startTime"] == "08:00"
    assert conflict["blockB"]["startTime"] == "09:00"
    assert conflict["message"] == "Conflict on Monday: 08:00-10:00 overlaps 09:00-11:00"


def test_validate_endpoint_returns_rule_violations_as_values(client):
    existing = [block("Monday", "08:00", "10:00")]

    rejected = client.post(
        "/api/schedules/validate",
        json={"candidate": block("Monday", "09:00", "11:00"), "existing": existing},
    )
    accepted = client.post(
        "/api/schedules/validate",
        json={"candidate": block("Monday", "10:00", "12:00"), "existing": existing},
    )

    assert rejected.status_code == 200
    assert rejected.json() == {"valid": False, "error": "This block overlaps 08:00-10:00 on Monday"}
    assert accepted.status_code == 200
    assert accepted.json()["valid"] is True


def test_validate_endpoint_uses_configured_limits(client, monkeypatch):
    monkeypatch.setenv("MAX_CLASS_MINUTES", "90")

    response = client.post(
        "/api/schedules/validate",
        json={"candidate": block("Friday", "08:00", "10:00")},
    )

    assert response.status_code == 200
    assert response.json() == {"valid": False, "error": "Maximum class duration is 90 minutes"}


def test_consolidate_endpoint_merges_touching_blocks(client):
    response = client.post(
        "/api/schedules/consolidate",
        json={
            "blocks": [
                block("Monday", "10:00", "12:00", "B-2"),
                block("Monday", "08:00", "10:00", "A-1"),
                block("Monday", "12:30", "13:30", "C-3"),
            ]
        },
    )

    assert response.status_code == 200
    assert response.json() == [
        {"day": "Monday", "startTime": "08:00", "endTime": "12:00", "rooms": ["A-1", "B-2"]},
        {"day": "Monday", "startTime": "12:30", "endTime": "13:30", "rooms": ["C-3"]},
    ]


def test_overview_endpoint_accepts_dashboard_payload(client):
    response = client.post(
        "/api/schedules/overview",
        json={
            "horarioJson": [
                {"dia": "Viernes", "horaInicio": "09:00", "horaFin": "10:00", "aula": "A1"},
                {"dia": "Miércoles", "horaInicio": "09:00", "horaFin": "10:30", "aula": "A2"},
            ]
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["summary"] == "Wednesday: 09:00-10:30 | Friday: 09:00-10:00"
    assert payload["weeklyHours"] == 2.5
    assert payload["classDays"] == ["Wednesday", "Friday"]
    assert payload["hasConflicts"] is False


def test_overview_endpoint_for_empty_schedule(client):
    response = client.post("/api/schedules/overview", json={"blocks": []})

    assert response.status_code == 200
    payload = response.json()
    assert payload["summary"] == "No schedule configured"
    assert payload["weeklyHours"] == 0.0
    assert payload["ranges"] == []


def test_malformed_blocks_are_rejected_with_422(client):
    bad_time = client.post("/api/schedules/conflicts", json={"blocks": [block("Monday", "8am", "10:00")]})
    bad_day = client.post("/api/schedules/conflicts", json={"blocks": [block("Someday", "08:00", "10:00")]})

    assert bad_time.status_code == 422
    assert bad_day.status_code == 422


def test_overview_endpoint_rejects_reversed_block(client):
    response = client.post(
        "/api/schedules/overview",
        json={"blocks": [block("Monday", "10:00", "09:00"), block("Monday", "09:30", "09:45")]},
    )

    assert response.status_code == 400
    assert response.json() == {
        "message": "Block on Monday must start before it ends: 10:00-09:00",
        "details": {"day": "Monday", "startTime": "10:00", "endTime": "09:00"},
    }


def test_conflicts_and_consolidate_endpoints_reject_reversed_block(client):
    payload = {"blocks": [block("Thursday", "12:00", "11:00")]}

    assert client.post("/api/schedules/conflicts", json=payload).status_code == 400
    assert client.post("/api/schedules/consolidate", json=payload).status_code == 400
