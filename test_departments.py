"""Department catalog CRUD"""

from conftest import auth_headers, maker_principal, make_assignment, make_department, make_maker


def test_list_departments_is_public_and_ordered(client, db):
    make_department(db, name="Physics", service_fee=450)
    make_department(db, name="Biology", service_fee=350)

    response = client.get("/departments")

    assert response.status_code == 200
    assert [d["name"] for d in response.json()] == ["Biology", "Physics"]


def test_create_department(client, admin_headers):
    response = client.post(
        "/departments",
        json={"name": "Mathematics", "description": "Calculus", "service_fee": 400},
        headers=admin_headers,
    )

    assert response.status_code == 201, response.text
    assert response.json()["service_fee"] == 400


def test_create_department_requires_admin(client, db):
    department = make_department(db)
    maker = make_maker(db, department)

    payload = {"name": "Mathematics", "service_fee": 400}
    assert client.post("/departments", json=payload).status_code == 401
    assert client.post("/departments", json=payload, headers=auth_headers(maker_principal(maker))).status_code == 403


def test_create_department_requires_positive_fee(client, admin_headers):
    response = client.post("/departments", json={"name": "Free", "service_fee": 0}, headers=admin_headers)

    assert response.status_code == 422


def test_create_department_duplicate_name(client, db, admin_headers):
    make_department(db, name="Chemistry", service_fee=400)

    response = client.post("/departments", json={"name": "Chemistry", "service_fee": 300}, headers=admin_headers)

    assert response.status_code == 409


def test_update_department_partially(client, db, admin_headers):
    department = make_department(db, name="Physics", service_fee=450)

    response = client.patch(f"/departments/{department.id}", json={"service_fee": 480}, headers=admin_headers)

    assert response.status_code == 200, response.text
    assert response.json()["name"] == "Physics"
    assert response.json()["service_fee"] == 480


def test_delete_department_with_maker_conflicts(client, db, admin_headers):
    department = make_department(db)
    make_maker(db, department)

    response = client.delete(f"/departments/{department.id}", headers=admin_headers)

    assert response.status_code == 409
    assert client.get(f"/departments/{department.id}").status_code == 200


def test_delete_department_with_assignment_conflicts(client, db, admin_headers):
    department = make_department(db)
    make_assignment(db, department)

    response = client.delete(f"/departments/{department.id}", headers=admin_headers)

    assert response.status_code == 409


def test_delete_unreferenced_department(client, db, admin_headers):
    department = make_department(db)

    response = client.delete(f"/departments/{department.id}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"/departments/{department.id}").status_code == 404


def test_delete_missing_department(client, admin_headers):
    assert client.delete("/departments/999", headers=admin_headers).status_code == 404
