"""Abuse reports and their advisory workflow"""

from assignmentpro.config import settings
from conftest import auth_headers, maker_principal, make_assignment, make_department, make_maker


def file_report(client, **payload):
    body = {
        "title": "Plagiarised solution",
        "description": "The delivered essay was copied",
        "reporter_name": "Seeker",
        "reporter_email": "seeker@example.com",
    }
    body.update(payload)
    return client.post("/reports", json=body)


def test_anyone_can_file_a_report(client, db):
    department = make_department(db)
    maker = make_maker(db, department)
    assignment = make_assignment(db, department)

    response = file_report(client, assignment_id=assignment.id, reported_user_id=maker.id)

    assert response.status_code == 201, response.text
    assert response.json()["status"] == "PENDING"
    assert response.json()["reported_user_id"] == maker.id


def test_report_references_must_exist(client):
    assert file_report(client, assignment_id=999).status_code == 400
    assert file_report(client, reported_user_id=999).status_code == 400


def test_report_requires_reporter_name(client):
    response = client.post("/reports", json={"title": "x", "description": "y"})

    assert response.status_code == 422


def test_listing_and_reading_require_admin(client, db, admin_headers):
    department = make_department(db)
    maker = make_maker(db, department)
    report_id = file_report(client).json()["id"]
    file_report(client, title="Late delivery")

    assert client.get("/reports").status_code == 401
    assert client.get("/reports", headers=auth_headers(maker_principal(maker))).status_code == 403

    listed = client.get("/reports", headers=admin_headers)
    assert listed.status_code == 200
    assert len(listed.json()) == 2
    assert client.get(f"/reports/{report_id}", headers=admin_headers).json()["id"] == report_id
    assert client.get("/reports/999", headers=admin_headers).status_code == 404


def test_workflow_transition_with_response(client, admin_headers):
    report_id = file_report(client).json()["id"]

    investigating = client.patch(f"/reports/{report_id}", json={"status": "INVESTIGATING"}, headers=admin_headers)
    resolved = client.patch(
        f"/reports/{report_id}",
        json={"status": "RESOLVED", "admin_response": "Refund issued"},
        headers=admin_headers,
    )

    assert investigating.status_code == 200
    assert resolved.status_code == 200
    assert resolved.json()["status"] == "RESOLVED"
    assert resolved.json()["admin_response"] == "Refund issued"


def test_out_of_workflow_transition_is_applied_by_default(client, admin_headers):
    report_id = file_report(client).json()["id"]

    response = client.patch(f"/reports/{report_id}", json={"status": "RESOLVED"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "RESOLVED"


def test_strict_mode_refuses_out_of_workflow_transition(client, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "REPORT_STRICT_TRANSITIONS", True)
    report_id = file_report(client).json()["id"]

    refused = client.patch(f"/reports/{report_id}", json={"status": "RESOLVED"}, headers=admin_headers)
    same = client.patch(f"/reports/{report_id}", json={"status": "PENDING"}, headers=admin_headers)
    dismissed = client.patch(f"/reports/{report_id}", json={"status": "DISMISSED"}, headers=admin_headers)

    assert refused.status_code == 409
    assert same.status_code == 200
    assert dismissed.status_code == 200
    assert client.get(f"/reports/{report_id}", headers=admin_headers).json()["status"] == "DISMISSED"
