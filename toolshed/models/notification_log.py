# toolshed/models/notification_log.py
from datetime import datetime

from toolshed.extensions import db


class NotificationLog(db.Model):
    __tablename__ = "notification_logs"

    id = db.Column(db.Integer, primary_key=True)

    receipt_id = db.Column(db.String(40), db.ForeignKey("borrow_receipts.id"), nullable=False, index=True)

    # overdue / due_soon
    type = db.Column(db.String(50), nullable=False, default="overdue")

    email = db.Column(db.String(255), nullable=True)
    message = db.Column(db.String(1000), nullable=True)

    sent_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    success = db.Column(db.Boolean, nullable=False, default=True)
    error_message = db.Column(db.String(500), nullable=True)

    receipt = db.relationship("BorrowReceipt", backref="notifications")
