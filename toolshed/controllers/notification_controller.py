from flask import Blueprint

from toolshed.services.notification_service import NotificationService
from toolshed.utils.decorators import admin_required
from toolshed.utils.responses import json_ok

notif_bp = Blueprint("notifications", __name__)


@notif_bp.post("/run-due-check")
@admin_required
def run_due_check():
    stats = NotificationService.check_due_receipts()
    return json_ok(stats, message="Due check completed")
