from datetime import datetime, timedelta

import pytest

from toolshed.extensions import mail
from toolshed.repositories.notification_repo import NotificationRepo
from toolshed.services.borrow_service import BorrowService
from toolshed.services.notification_service import NotificationService
from toolshed.tasks.due_check import run_due_check_job


@pytest.fixture
def active_receipt(make_item, due_date):
    def _make(email="student-0001@campus.edu"):
        item_id = make_item("Flat end mill 6mm", total=5)
        return BorrowService.checkout(
            "student-0001",
            {"item_ids": [item_id], "item_quantities": [2], "due_date": due_date},
            user_email=email,
        )
    return _make


def test_overdue_receipt_is_mailed_once(active_receipt):
    receipt = active_receipt()
    later = receipt.due_date + timedelta(days=1)

    with mail.record_messages() as outbox:
        stats = NotificationService.check_due_receipts(now=later)
        again = NotificationService.check_due_receipts(now=later)

    assert stats == {"overdue": 1, "due_soon": 0, "mail_sent": 1, "skipped": 0}
    assert again["skipped"] == 1 and again["mail_sent"] == 0
    assert len(outbox) == 1
    assert outbox[0].recipients == ["student-0001@campus.edu"]
    assert receipt.id in outbox[0].subject
    assert "Flat end mill 6mm x2" in outbox[0].body

    logs = NotificationRepo.list_for_receipt(receipt.id)
    assert [(log.type, log.success) for log in logs] == [("overdue", True)]


def test_receipt_due_soon_gets_a_reminder(active_receipt):
    receipt = active_receipt()

    with mail.record_messages() as outbox:
        stats = NotificationService.check_due_receipts(now=receipt.due_date - timedelta(hours=1))

    assert stats["due_soon"] == 1 and stats["overdue"] == 0
    assert len(outbox) == 1
    assert "due soon" in outbox[0].subject


def test_nothing_is_sent_well_before_the_due_date(active_receipt):
    active_receipt()
    with mail.record_messages() as outbox:
        stats = NotificationService.check_due_receipts(now=datetime.utcnow())
    assert stats["mail_sent"] == 0
    assert outbox == []


def test_missing_email_is_logged_as_failure(active_receipt):
    receipt = active_receipt(email=None)

    with mail.record_messages() as outbox:
        stats = NotificationService.check_due_receipts(now=receipt.due_date + timedelta(days=1))

    assert stats["mail_sent"] == 0
    assert outbox == []
    log = NotificationRepo.list_for_receipt(receipt.id)[0]
    assert (log.success, log.error_message) == (False, "missing_email")


def test_scheduled_job_runs_the_check(app, active_receipt):
    active_receipt()
    stats = run_due_check_job(app)
    assert stats == {"overdue": 0, "due_soon": 0, "mail_sent": 0, "skipped": 0}


def test_admin_can_trigger_the_check(client, auth_headers):
    assert client.post("/notifications/run-due-check", headers=auth_headers()).status_code == 403

    resp = client.post("/notifications/run-due-check", headers=auth_headers("staff-0001", role="admin"))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["mail_sent"] == 0
