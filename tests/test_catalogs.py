from campus.seed import seed_sample_data


def test_catalog_reads_require_token(client):
    for path in ("/api/classrooms", "/api/labs", "/api/buses", "/api/cafeteria/menu", "/api/cafeteria/info"):
        assert client.get(path).status_code == 401


def test_classroom_crud_flow(client, admin_headers, make_student):
    student_headers, _ = make_student("2021001")

    forbidden = client.post(
        "/api/classrooms",
        json={"room": "9-999", "dept": "CSE", "floor": "9th Floor", "capacity": 10},
        headers=student_headers,
    )
    assert forbidden.status_code == 403

    created = client.post(
        "/api/classrooms",
        json={"room": "9-999", "dept": "CSE", "floor": "9th Floor", "capacity": 10},
        headers=admin_headers,
    )
    assert created.status_code == 201
    classroom_id = created.json()["id"]

    fetched = client.get(f"/api/classrooms/{classroom_id}", headers=student_headers)
    assert fetched.status_code == 200
    assert fetched.json()["room"] == "9-999"

    updated = client.put(f"/api/classrooms/{classroom_id}", json={"capacity": 25}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["capacity"] == 25
    assert updated.json()["room"] == "9-999"

    deleted = client.delete(f"/api/classrooms/{classroom_id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert client.get(f"/api/classrooms/{classroom_id}", headers=admin_headers).status_code == 404


def test_duplicate_room_is_rejected(client, admin_headers, classroom):
    response = client.post(
        "/api/classrooms",
        json={"room": classroom["room"], "dept": "EEE", "floor": "1st Floor", "capacity": 20},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_update_missing_classroom_is_not_found(client, admin_headers):
    response = client.put("/api/classrooms/777", json={"capacity": 5}, headers=admin_headers)
    assert response.status_code == 404


def test_classroom_list_filters_and_search(client, admin_headers, db_session):
    seed_sample_data(db_session)

    cse = client.get("/api/classrooms", params={"dept": "CSE"}, headers=admin_headers).json()
    assert cse and all(room["dept"] == "CSE" for room in cse)

    everything = client.get("/api/classrooms", params={"dept": "all"}, headers=admin_headers).json()
    assert len(everything) == 12

    third_floor = client.get("/api/classrooms", params={"search": "3rd"}, headers=admin_headers).json()
    assert {room["room"] for room in third_floor} == {"3-401", "3-402", "3-403"}


def test_lab_status_patch_and_filter(client, admin_headers, make_student, lab):
    student_headers, _ = make_student("2021001")

    denied = client.patch(f"/api/labs/{lab['id']}/status", json={"status": "closed"}, headers=student_headers)
    assert denied.status_code == 403

    response = client.patch(f"/api/labs/{lab['id']}/status", json={"status": "closed"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "closed"

    bad = client.patch(f"/api/labs/{lab['id']}/status", json={"status": "ajar"}, headers=admin_headers)
    assert bad.status_code == 400

    closed = client.get("/api/labs", params={"status": "closed"}, headers=student_headers).json()
    assert [row["name"] for row in closed] == ["CAD Lab"]
    assert client.get("/api/labs", params={"status": "open"}, headers=student_headers).json() == []


def test_bus_stops_are_ordered_and_replaced(client, admin_headers):
    created = client.post(
        "/api/buses",
        json={"number": "Z9", "time": "7:00 AM", "route": "Campus → Harbor", "stops": ["Campus Gate", "Harbor"]},
        headers=admin_headers,
    )
    assert created.status_code == 201
    bus = created.json()
    assert bus["stops"] == ["Campus Gate", "Harbor"]

    updated = client.put(
        f"/api/buses/{bus['id']}",
        json={"time": "7:15 AM", "stops": ["Harbor", "Old Town", "Campus Gate"]},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["time"] == "7:15 AM"
    assert updated.json()["stops"] == ["Harbor", "Old Town", "Campus Gate"]

    # omitting stops keeps the current list
    renamed = client.put(f"/api/buses/{bus['id']}", json={"route": "Harbor loop"}, headers=admin_headers)
    assert renamed.json()["stops"] == ["Harbor", "Old Town", "Campus Gate"]


def test_bus_search_matches_stop_names(client, admin_headers, db_session):
    seed_sample_data(db_session)
    rows = client.get("/api/buses", params={"search": "lake view"}, headers=admin_headers).json()
    assert [bus["number"] for bus in rows] == ["B1"]


def test_menu_filters(client, admin_headers, db_session):
    seed_sample_data(db_session)

    drinks = client.get("/api/cafeteria/menu", params={"category": "drinks"}, headers=admin_headers).json()
    assert drinks and {item["category"] for item in drinks} == {"drinks"}

    limited = client.get(
        "/api/cafeteria/menu", params={"category": "snacks", "availability": "limited"}, headers=admin_headers
    ).json()
    assert [item["name"] for item in limited] == ["Spring Rolls"]
    assert limited[0]["price"] == 45.0


def test_menu_item_rejects_negative_price(client, admin_headers):
    response = client.post(
        "/api/cafeteria/menu",
        json={"name": "Mystery", "description": "?", "price": -1, "category": "food"},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_cafeteria_info_defaults_then_updates(client, admin_headers, make_student):
    student_headers, _ = make_student("2021001")

    default = client.get("/api/cafeteria/info", headers=student_headers)
    assert default.status_code == 200
    assert default.json()["location"] == "Main Campus"

    payload = {"location": "Food Court", "contact": "+1-555-0100", "hours": "7:00 AM - 9:00 PM"}
    assert client.put("/api/cafeteria/info", json=payload, headers=student_headers).status_code == 403

    updated = client.put("/api/cafeteria/info", json=payload, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["location"] == "Food Court"

    # the cached default is dropped by the update
    current = client.get("/api/cafeteria/info", headers=student_headers).json()
    assert current["location"] == "Food Court"
    assert current["id"] == updated.json()["id"]
