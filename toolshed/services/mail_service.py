# toolshed/services/mail_service.py
from __future__ import annotations

from datetime import datetime
from flask import current_app
from flask_mail import Message

from toolshed.extensions import mail
from toolshed.models.notification_log import NotificationLog
from toolshed.repositories.notification_repo import NotificationRepo


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[MailService] could not send mail to {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def log_notification(
        receipt_id: str,
        notif_type: str,
        to_email: str | None,
        message: str,
        success: bool,
        error: str | None = None,
        commit: bool = False,  # the due check commits once at the end
    ) -> NotificationLog:
        row = NotificationLog(
            receipt_id=receipt_id,
            type=notif_type,
            email=to_email,
            message=message[:1000],
            success=bool(success),
            error_message=error[:500] if error else None,
            sent_at=datetime.utcnow(),
        )
        return NotificationRepo.log(row, commit=commit)

    @staticmethod
    def _item_summary(receipt) -> str:
        parts = []
        for line in receipt.lines:
            if line.outstanding <= 0:
                continue
            name = line.item.name if line.item else f"Item {line.item_id}"
            parts.append(f"  - {name} x{line.outstanding}")
        return "\n".join(parts)

    @staticmethod
    def _send_and_log(receipt, notif_type: str, subject: str, body: str) -> bool:
        to_email = receipt.user_email

        if not to_email:
            MailService.log_notification(
                receipt_id=receipt.id,
                notif_type=notif_type,
                to_email=None,
                message="Borrower email not found",
                success=False,
                error="missing_email",
            )
            return False

        ok, err = MailService.send_email(to_email, subject, body)

        MailService.log_notification(
            receipt_id=receipt.id,
            notif_type=notif_type,
            to_email=to_email,
            message=body if ok else "Mail could not be sent",
            success=ok,
            error=err,
        )
        return ok

    @staticmethod
    def send_overdue_mail(receipt) -> bool:
        subject = f"Tool return overdue: receipt {receipt.id}"
        body = (
            "Hello,\n\n"
            f"The due date of your borrow receipt {receipt.id} has passed.\n"
            f"Due date: {receipt.due_date:%Y-%m-%d %H:%M} UTC\n\n"
            "Items still outstanding:\n"
            f"{MailService._item_summary(receipt)}\n\n"
            "Please return them to the tool shop as soon as possible.\n"
        )
        return MailService._send_and_log(receipt, "overdue", subject, body)

    @staticmethod
    def send_due_soon_mail(receipt) -> bool:
        subject = f"Tool return due soon: receipt {receipt.id}"
        body = (
            "Hello,\n\n"
            f"Your borrow receipt {receipt.id} is due soon.\n"
            f"Due date: {receipt.due_date:%Y-%m-%d %H:%M} UTC\n\n"
            "Items still outstanding:\n"
            f"{MailService._item_summary(receipt)}\n\n"
            "Please remember to return them on time.\n"
        )
        return MailService._send_and_log(receipt, "due_soon", subject, body)
