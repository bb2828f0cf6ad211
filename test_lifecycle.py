"""Assignment state machine: submit, claim, approve/reject, complete"""

import pytest

from assignmentpro.models import Assignment, AssignmentStatus, Payment, PaymentStatus, PaymentType, User
from assignmentpro.services import lifecycle
from assignmentpro.services.file_storage import file_storage
from assignmentpro.services.ledger import commission_for
from assignmentpro.utils.exceptions import Conflict
from conftest import (
    PNG_BYTES, auth_headers, maker_principal, make_assignment, make_department, make_maker, screenshot,
)


def submission_form(department_id, **overrides):
    form = {
        "title": "Binary search trees",
        "description": "Insert, delete and balance",
        "submitter_name": "Seeker",
        "submitter_phone": "+251911111111",
        "submitter_telegram": "seeker_tg",
        "department_id": str(department_id),
    }
    form.update(overrides)
    return {key: value for key, value in form.items() if value is not None}


def complete(client, assignment_id, headers, name="scan.png", content=PNG_BYTES):
    return client.post(
        f"/assignments/{assignment_id}/complete",
        files={"ai_detection_screenshot": (name, content, "image/png")},
        headers=headers,
    )


def commission_payments(db, assignment_id):
    db.expire_all()
    return db.query(Payment).filter(
        Payment.assignment_id == assignment_id,
        Payment.type == PaymentType.COMMISSION,
    ).all()


def test_full_lifecycle_credits_commission_once(client, db, admin_headers):
    department = make_department(db, name="CS", service_fee=500)
    maker = make_maker(db, department)
    maker_headers = auth_headers(maker_principal(maker))

    submitted = client.post(
        "/assignments",
        data=submission_form(department.id),
        files=[("files", ("brief.pdf", b"%PDF-1.4 brief", "application/pdf"))],
    )
    assert submitted.status_code == 201, submitted.text
    assignment = submitted.json()["assignment"]
    assert submitted.json()["code"].startswith("ASG-")
    assert assignment["status"] == "PENDING"
    assert assignment["is_approved_by_admin"] is False
    assert assignment["assigned_to_id"] is None
    assert assignment["status_label"] == "Pending Admin Approval"
    assert len(assignment["files"]) == 1
    assert assignment["files"][0].startswith("/uploads/assignments/")

    approved = client.patch(
        f"/admin/assignments/{assignment['id']}", json={"is_approved_by_admin": True}, headers=admin_headers,
    )
    assert approved.status_code == 200, approved.text
    assert approved.json()["is_approved_by_admin"] is True

    claimed = client.post("/available-assignments", json={"assignment_id": assignment["id"]}, headers=maker_headers)
    assert claimed.status_code == 200, claimed.text
    assert claimed.json()["assignment"]["status"] == "IN_PROGRESS"
    assert claimed.json()["assignment"]["assigned_to_id"] == maker.id
    assert claimed.json()["assignment"]["status_label"] == "Approved - In Progress"

    completed = complete(client, assignment["id"], maker_headers)
    assert completed.status_code == 200, completed.text
    body = completed.json()
    assert body["commission"] == 400
    assert body["assignment"]["status"] == "COMPLETED"
    assert body["assignment"]["status_label"] == "Completed"
    assert body["assignment"]["ai_detection_screenshot"].startswith("/uploads/ai-detection/ai-detection-")
    assert body["assignment"]["completed_at"] is not None

    payments = commission_payments(db, assignment["id"])
    assert len(payments) == 1
    assert payments[0].amount == 400
    assert payments[0].status == PaymentStatus.COMPLETED
    assert payments[0].user_id == maker.id

    refreshed = db.query(User).filter(User.id == maker.id).one()
    assert refreshed.balance == 400
    assert refreshed.total_earnings == 400

    # a second completion never pays twice
    again = complete(client, assignment["id"], maker_headers)
    assert again.status_code == 409
    assert len(commission_payments(db, assignment["id"])) == 1
    db.expire_all()
    assert db.query(User).filter(User.id == maker.id).one().balance == 400


def test_claim_requires_admin_approval(client, db):
    department = make_department(db)
    maker = make_maker(db, department)
    assignment = make_assignment(db, department)

    response = client.post(
        "/available-assignments", json={"assignment_id": assignment.id}, headers=auth_headers(maker_principal(maker)),
    )

    assert response.status_code == 409


def test_rejected_assignment_cannot_be_claimed(client, db, admin_headers):
    department = make_department(db)
    maker = make_maker(db, department)
    assignment = make_assignment(db, department, approved=True)

    rejected = client.patch(
        f"/admin/assignments/{assignment.id}", json={"is_approved_by_admin": False}, headers=admin_headers,
    )
    assert rejected.status_code == 200, rejected.text
    assert rejected.json()["status"] == "REJECTED"
    assert rejected.json()["status_label"] == "Rejected"

    claim = client.post(
        "/available-assignments", json={"assignment_id": assignment.id}, headers=auth_headers(maker_principal(maker)),
    )
    assert claim.status_code == 409

    # rejected is terminal
    reapprove = client.patch(
        f"/admin/assignments/{assignment.id}", json={"is_approved_by_admin": True}, headers=admin_headers,
    )
    assert reapprove.status_code == 409


def test_reject_pending_unapproved_assignment(client, db, admin_headers):
    department = make_department(db)
    assignment = make_assignment(db, department, approved=False)

    response = client.patch(
        f"/admin/assignments/{assignment.id}", json={"is_approved_by_admin": False}, headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "REJECTED"


def test_claim_by_second_maker_conflicts_and_reclaim_is_noop(client, db):
    department = make_department(db)
    first = make_maker(db, department, email="first@example.com")
    second = make_maker(db, department, email="second@example.com")
    assignment = make_assignment(db, department, approved=True)

    first_headers = auth_headers(maker_principal(first))
    assert client.post(
        "/available-assignments", json={"assignment_id": assignment.id}, headers=first_headers,
    ).status_code == 200

    stolen = client.post(
        "/available-assignments", json={"assignment_id": assignment.id}, headers=auth_headers(maker_principal(second)),
    )
    assert stolen.status_code == 409

    again = client.post("/available-assignments", json={"assignment_id": assignment.id}, headers=first_headers)
    assert again.status_code == 200
    assert again.json()["assignment"]["assigned_to_id"] == first.id


def test_claim_from_another_department_is_forbidden(client, db):
    cs = make_department(db, name="CS", service_fee=500)
    math = make_department(db, name="Math", service_fee=400)
    maker = make_maker(db, math)
    assignment = make_assignment(db, cs, approved=True)

    response = client.post(
        "/available-assignments", json={"assignment_id": assignment.id}, headers=auth_headers(maker_principal(maker)),
    )

    assert response.status_code == 403


def test_claim_unknown_assignment(client, db):
    department = make_department(db)
    maker = make_maker(db, department)

    response = client.post(
        "/available-assignments", json={"assignment_id": 999}, headers=auth_headers(maker_principal(maker)),
    )

    assert response.status_code == 404


def test_available_assignments_lists_claimable_work_in_own_department(client, db):
    cs = make_department(db, name="CS", service_fee=500)
    math = make_department(db, name="Math", service_fee=400)
    maker = make_maker(db, cs)
    other = make_maker(db, cs, email="other@example.com")

    open_one = make_assignment(db, cs, approved=True)
    make_assignment(db, cs, approved=False)
    make_assignment(db, math, approved=True)
    make_assignment(db, cs, approved=True, status=AssignmentStatus.IN_PROGRESS, assigned_to=other)
    mine = make_assignment(db, cs, approved=True, status=AssignmentStatus.IN_PROGRESS, assigned_to=maker)

    response = client.get("/available-assignments", headers=auth_headers(maker_principal(maker)))

    assert response.status_code == 200
    assert sorted(a["id"] for a in response.json()) == sorted([open_one.id, mine.id])


def test_complete_requires_screenshot(client, db):
    department = make_department(db)
    maker = make_maker(db, department)
    assignment = make_assignment(db, department, approved=True, status=AssignmentStatus.IN_PROGRESS, assigned_to=maker)

    response = client.post(f"/assignments/{assignment.id}/complete", headers=auth_headers(maker_principal(maker)))

    assert response.status_code == 400
    assert commission_payments(db, assignment.id) == []


def test_complete_rejects_non_image_screenshot(client, db):
    department = make_department(db)
    maker = make_maker(db, department)
    assignment = make_assignment(db, department, approved=True, status=AssignmentStatus.IN_PROGRESS, assigned_to=maker)

    response = complete(client, assignment.id, auth_headers(maker_principal(maker)), name="notes.txt", content=b"hello")

    assert response.status_code == 400


def test_only_owner_can_complete(client, db):
    department = make_department(db)
    owner = make_maker(db, department)
    intruder = make_maker(db, department, email="intruder@example.com")
    assignment = make_assignment(db, department, approved=True, status=AssignmentStatus.IN_PROGRESS, assigned_to=owner)

    response = complete(client, assignment.id, auth_headers(maker_principal(intruder)))

    assert response.status_code == 403
    assert commission_payments(db, assignment.id) == []


def test_complete_requires_in_progress_and_approved(client, db):
    department = make_department(db)
    maker = make_maker(db, department)
    assignment = make_assignment(db, department, approved=False, status=AssignmentStatus.IN_PROGRESS, assigned_to=maker)

    response = complete(client, assignment.id, auth_headers(maker_principal(maker)))

    assert response.status_code == 409


def test_admin_cannot_set_completed_status(client, db, admin_headers):
    department = make_department(db)
    maker = make_maker(db, department)
    assignment = make_assignment(db, department, approved=True, status=AssignmentStatus.IN_PROGRESS, assigned_to=maker)

    response = client.patch(f"/admin/assignments/{assignment.id}", json={"status": "COMPLETED"}, headers=admin_headers)

    assert response.status_code == 409
    db.expire_all()
    assert db.query(Assignment).filter(Assignment.id == assignment.id).one().status == AssignmentStatus.IN_PROGRESS


def test_admin_cannot_reject_completed_assignment(client, db, admin_headers):
    department = make_department(db)
    maker = make_maker(db, department)
    assignment = make_assignment(db, department, approved=True, status=AssignmentStatus.COMPLETED, assigned_to=maker)

    response = client.patch(
        f"/admin/assignments/{assignment.id}", json={"is_approved_by_admin": False}, headers=admin_headers,
    )

    assert response.status_code == 409


def test_admin_approval_of_completed_assignment_finalizes_commission(client, db, admin_headers):
    department = make_department(db)
    maker = make_maker(db, department)
    assignment = make_assignment(db, department, approved=False, status=AssignmentStatus.COMPLETED, assigned_to=maker)
    assignment.ai_detection_screenshot = "/uploads/ai-detection/ai-detection-1-scan.png"
    db.add(Payment(
        amount=400,
        type=PaymentType.COMMISSION,
        status=PaymentStatus.PENDING,
        assignment_id=assignment.id,
        user_id=maker.id,
    ))
    db.commit()

    for _ in range(2):
        response = client.patch(
            f"/admin/assignments/{assignment.id}", json={"is_approved_by_admin": True}, headers=admin_headers,
        )
        assert response.status_code == 200, response.text
        assert response.json()["status"] == "COMPLETED"

    payments = commission_payments(db, assignment.id)
    assert len(payments) == 1
    assert payments[0].status == PaymentStatus.COMPLETED


def test_admin_reassigns_to_eligible_maker_only(client, db, admin_headers):
    department = make_department(db)
    maker = make_maker(db, department)
    unpaid = make_maker(db, department, email="unpaid@example.com", paid=False)
    assignment = make_assignment(db, department)

    refused = client.patch(
        f"/admin/assignments/{assignment.id}", json={"assigned_to_id": unpaid.id}, headers=admin_headers,
    )
    assert refused.status_code == 400

    response = client.patch(
        f"/admin/assignments/{assignment.id}",
        json={"assigned_to_id": maker.id, "solution_delivered": True},
        headers=admin_headers,
    )
    assert response.status_code == 200, response.text
    assert response.json()["assigned_to_id"] == maker.id
    assert response.json()["solution_delivered"] is True


def test_submit_with_preselected_maker(client, db):
    department = make_department(db)
    maker = make_maker(db, department)

    response = client.post("/assignments", data=submission_form(department.id, assigned_to_id=str(maker.id)))

    assert response.status_code == 201, response.text
    assert response.json()["assignment"]["assigned_to_id"] == maker.id
    assert response.json()["assignment"]["status"] == "PENDING"


def test_submit_with_maker_from_another_department(client, db):
    cs = make_department(db, name="CS", service_fee=500)
    math = make_department(db, name="Math", service_fee=400)
    maker = make_maker(db, math)

    response = client.post("/assignments", data=submission_form(cs.id, assigned_to_id=str(maker.id)))

    assert response.status_code == 400


def test_submit_requires_contact_channel(client, db):
    department = make_department(db)

    response = client.post("/assignments", data=submission_form(department.id, submitter_telegram=None))

    assert response.status_code == 400
    assert db.query(Assignment).count() == 0


def test_submit_unknown_department(client):
    response = client.post("/assignments", data=submission_form(999))

    assert response.status_code == 400


def test_maker_lists_only_own_assignments(client, db, admin_headers):
    department = make_department(db)
    maker = make_maker(db, department)
    other = make_maker(db, department, email="other@example.com")
    mine = make_assignment(db, department, approved=True, status=AssignmentStatus.IN_PROGRESS, assigned_to=maker)
    make_assignment(db, department, approved=True, status=AssignmentStatus.IN_PROGRESS, assigned_to=other)
    headers = auth_headers(maker_principal(maker))

    own = client.get("/assignments", headers=headers)
    assert [a["id"] for a in own.json()] == [mine.id]

    assert client.get(f"/assignments?userId={other.id}", headers=headers).status_code == 403
    assert len(client.get("/assignments", headers=admin_headers).json()) == 2
    assert len(client.get(f"/assignments?userId={other.id}", headers=admin_headers).json()) == 1


def test_get_assignment_is_scoped_to_owner(client, db, admin_headers):
    department = make_department(db)
    maker = make_maker(db, department)
    other = make_maker(db, department, email="other@example.com")
    assignment = make_assignment(db, department, approved=True, status=AssignmentStatus.IN_PROGRESS, assigned_to=maker)

    assert client.get(f"/assignments/{assignment.id}", headers=auth_headers(maker_principal(maker))).status_code == 200
    assert client.get(f"/assignments/{assignment.id}", headers=auth_headers(maker_principal(other))).status_code == 403
    assert client.get(f"/assignments/{assignment.id}", headers=admin_headers).status_code == 200
    assert client.get("/assignments/999", headers=admin_headers).status_code == 404


def test_status_labels():
    from assignmentpro.models import status_label

    assert status_label(AssignmentStatus.PENDING, False) == "Pending Admin Approval"
    assert status_label(AssignmentStatus.PENDING, True) == "Approved - Ready to Start"
    assert status_label(AssignmentStatus.IN_PROGRESS, True) == "Approved - In Progress"
    assert status_label(AssignmentStatus.IN_PROGRESS, False) == "Pending Admin Approval"
    assert status_label(AssignmentStatus.COMPLETED, False) == "Completed"
    assert status_label(AssignmentStatus.REJECTED, True) == "Rejected"


@pytest.mark.parametrize("fee, expected", [(500, 400), (455, 364), (333, 266), (1, 0)])
def test_commission_is_floored(fee, expected):
    assert commission_for(fee) == expected


def test_service_layer_complete_twice_raises_conflict(db):
    department = make_department(db, service_fee=450)
    maker = make_maker(db, department)
    assignment = make_assignment(db, department, approved=True, status=AssignmentStatus.IN_PROGRESS, assigned_to=maker)
    principal = maker_principal(maker)

    _, commission = lifecycle.complete_assignment(db, assignment.id, principal, screenshot())
    assert commission == 360

    with pytest.raises(Conflict):
        lifecycle.complete_assignment(db, assignment.id, principal, screenshot())

    assert len(commission_payments(db, assignment.id)) == 1


def test_same_named_attachments_are_kept_apart(client, db):
    department = make_department(db)

    submitted = client.post(
        "/assignments",
        data=submission_form(department.id),
        files=[
            ("files", ("brief.pdf", b"FIRST", "application/pdf")),
            ("files", ("brief.pdf", b"SECOND", "application/pdf")),
        ],
    )
    assert submitted.status_code == 201, submitted.text
    uris = submitted.json()["assignment"]["files"]
    assert len(uris) == 2
    assert uris[0] != uris[1]
    assert [file_storage.path_for(uri).read_bytes() for uri in uris] == [b"FIRST", b"SECOND"]


def test_generated_filenames_differ_for_the_same_name():
    first = file_storage.generate_filename("scan.png", "ai-detection-")
    second = file_storage.generate_filename("scan.png", "ai-detection-")
    assert first != second
    assert first.startswith("ai-detection-") and first.endswith("-scan.png")
