from toolshed.models.notification_log import NotificationLog
from toolshed.extensions import db


class NotificationRepo:
    @staticmethod
    def already_sent(receipt_id: str, notif_type: str = "overdue") -> bool:
        return NotificationLog.query.filter_by(receipt_id=receipt_id, type=notif_type).first() is not None

    @staticmethod
    def log(entry: NotificationLog, commit: bool = False):
        db.session.add(entry)
        if commit:
            db.session.commit()
        return entry

    @staticmethod
    def list_for_receipt(receipt_id: str):
        return NotificationLog.query.filter_by(receipt_id=receipt_id).order_by(NotificationLog.id.asc()).all()
