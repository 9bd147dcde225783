from datetime import datetime, timedelta

from flask import current_app

from toolshed.extensions import db
from toolshed.repositories.notification_repo import NotificationRepo
from toolshed.repositories.receipt_repo import ReceiptRepo
from toolshed.services.mail_service import MailService


class NotificationService:
    @staticmethod
    def check_due_receipts(now: datetime | None = None) -> dict:
        """
        Mails borrowers of active receipts that are overdue or due soon.
        A receipt gets at most one mail per type; every attempt is logged.
        """
        now = now or datetime.utcnow()
        due_soon_limit = now + timedelta(hours=current_app.config.get("DUE_SOON_HOURS", 24))

        overdue = ReceiptRepo.find_overdue(now)
        due_soon = ReceiptRepo.find_due_between(now, due_soon_limit)

        stats = {"overdue": len(overdue), "due_soon": len(due_soon), "mail_sent": 0, "skipped": 0}

        for receipt in overdue:
            if NotificationRepo.already_sent(receipt.id, "overdue"):
                stats["skipped"] += 1
                continue
            if MailService.send_overdue_mail(receipt):
                stats["mail_sent"] += 1

        for receipt in due_soon:
            if NotificationRepo.already_sent(receipt.id, "due_soon"):
                stats["skipped"] += 1
                continue
            if MailService.send_due_soon_mail(receipt):
                stats["mail_sent"] += 1

        db.session.commit()

        current_app.logger.info(
            f"[due_check] overdue={stats['overdue']} due_soon={stats['due_soon']} "
            f"mail_sent={stats['mail_sent']} skipped={stats['skipped']}"
        )
        return stats
