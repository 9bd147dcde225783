# toolshed/tasks/due_check.py
from flask import current_app

from toolshed.extensions import db
from toolshed.services.notification_service import NotificationService


def run_due_check_job(app):
    """
    Scheduled entry point for the due-date reminder mails.
    Runs inside an app context; a failing run is rolled back and logged.
    """
    with app.app_context():
        try:
            return NotificationService.check_due_receipts()
        except Exception as e:
            db.session.rollback()
            current_app.logger.exception(f"[due_check] failed: {e}")
            return None
